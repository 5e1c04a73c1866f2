"""
ROI Narrative Writer - turns a calculated ROI result into a plain-language
investment summary using an OpenAI chat model.

The numbers always come from the calculator; the model only writes prose
around them. When no model is reachable a template summary is returned.
"""

import os
import re
from typing import Optional, Dict

from openai import OpenAI
from dotenv import load_dotenv

from calculator import CalculationResult, payback_status, roi_rating

# Load environment variables
load_dotenv()


class ROINarrativeWriter:
    """Writes investment narratives for ROI calculations."""

    DEFAULT_MODEL = "gpt-4o-mini"

    NARRATIVE_PROMPT = """You are a residential renovation investment analyst. Write a short, practical ROI summary for a homeowner using ONLY the figures below. Do not invent new numbers.

PROJECT:
- Room: {room}
- Size: {square_footage:,.0f} sq ft ({room_size})
- Quality level: {quality_level}
- Region: {region}
- Current property value: ${property_value:,.0f}

CALCULATED FIGURES:
- Estimated cost: ${low_cost:,.0f} - ${total_cost:,.0f}
- Estimated value increase: ${value_increase:,.0f}
- ROI: {roi_percentage:.0f}% ({rating})
- Payback timeline: {payback} months ({payback_status})
- 5-year property projection: ${projection:,.0f}

MARKET AVERAGES:
- ROI: {market_roi:.0f}%
- Cost: ${market_cost:,.0f}
- Timeframe: {market_time} months

RULE-BASED NOTES:
{notes}

FORMAT YOUR RESPONSE AS FOLLOWS:

EXECUTIVE SUMMARY
[Two or three sentences]

INVESTMENT
Investment: $X - $Y
ROI: N%
Payback Period: N months

MARKET POSITION
[How the project compares with the market averages]

RISKS AND SUGGESTIONS
- [Bullet points drawn from the notes above]
"""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, client=None):
        """
        Initialize the narrative writer.

        Args:
            api_key: OpenAI API key (defaults to OPENAI_API_KEY)
            model: Chat model name (defaults to OPENAI_MODEL or gpt-4o-mini)
            client: Preconfigured OpenAI-compatible client
        """
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.model = model or os.getenv("OPENAI_MODEL", self.DEFAULT_MODEL)
        if client is not None:
            self.client = client
        elif self.api_key:
            self.client = OpenAI(api_key=self.api_key)
        else:
            self.client = None

    def build_prompt(self, result: CalculationResult) -> str:
        """Fill the narrative prompt from a calculation result."""
        calc_input = result.input.to_dict()
        metrics = result.roi_metrics
        market = result.market_comparison

        notes = result.recommendations + result.risk_factors
        notes_text = "\n".join(f"- {note}" for note in notes) or "- None"

        return self.NARRATIVE_PROMPT.format(
            room=str(calc_input["roomType"]).replace("_", " "),
            square_footage=result.input.square_footage,
            room_size=calc_input["roomSize"],
            quality_level=calc_input["qualityLevel"],
            region=str(calc_input["region"]).replace("_", " "),
            property_value=result.input.current_property_value,
            low_cost=result.cost_breakdown.total - result.cost_breakdown.contingency,
            total_cost=result.cost_breakdown.total,
            value_increase=metrics.estimated_value_increase,
            roi_percentage=metrics.roi_percentage,
            rating=roi_rating(metrics.roi_percentage),
            payback=metrics.payback_timeline_months,
            payback_status=payback_status(metrics.payback_timeline_months),
            projection=metrics.five_year_projection,
            market_roi=market.average_roi,
            market_cost=market.average_cost,
            market_time=market.average_timeframe,
            notes=notes_text,
        )

    def _call_openai(self, prompt: str) -> str:
        """Call the OpenAI chat API."""
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=1500,
            temperature=0.3
        )
        return response.choices[0].message.content or ""

    def generate(self, result: CalculationResult) -> str:
        """
        Write a narrative for a calculation result.

        Returns:
            Model-written narrative, or the template narrative if the model
            is not configured, fails, or returns nothing
        """
        if not self.client:
            return fallback_narrative(result)

        try:
            narrative = self._call_openai(self.build_prompt(result))
        except Exception as e:
            print(f"ROI narrative generation failed, using fallback: {e}")
            return fallback_narrative(result)

        if not narrative.strip():
            print("ROI narrative generation returned no text, using fallback")
            return fallback_narrative(result)

        return narrative.strip()


def fallback_narrative(result: CalculationResult) -> str:
    """Template narrative built straight from the calculated figures."""
    calc_input = result.input.to_dict()
    metrics = result.roi_metrics
    market = result.market_comparison
    breakdown = result.cost_breakdown
    room = str(calc_input["roomType"]).replace("_", " ")

    lines = [
        "EXECUTIVE SUMMARY",
        f"Based on industry benchmarks for {room} renovations, this project is rated "
        f"{roi_rating(metrics.roi_percentage)} with a {payback_status(metrics.payback_timeline_months).lower()} payback.",
        "",
        "INVESTMENT",
        f"Investment: ${breakdown.total - breakdown.contingency:,} - ${breakdown.total:,}",
        f"ROI: {metrics.roi_percentage:.0f}%",
        f"Payback Period: {metrics.payback_timeline_months} months",
        f"5-Year Projection: ${metrics.five_year_projection:,}",
        "",
        "MARKET POSITION",
        f"Market averages for this room are {market.average_roi:.0f}% ROI at ${market.average_cost:,} "
        f"over {market.average_timeframe} months.",
    ]

    notes = result.recommendations + result.risk_factors
    if notes:
        lines.append("")
        lines.append("RISKS AND SUGGESTIONS")
        lines.extend(f"- {note}" for note in notes)

    lines.append("")
    lines.append("This analysis is based on industry averages and should be refined with local market data.")
    return "\n".join(lines)


def parse_roi_metrics(narrative: str) -> Dict[str, Optional[object]]:
    """
    Pull headline figures back out of a narrative for storage.

    Returns:
        Dict with estimated_cost (upper end of the first "$X - $Y" range),
        roi_percentage and payback_timeline; None where not found
    """
    cost_match = re.search(r"\$([0-9,]+)\s*-\s*\$([0-9,]+)", narrative)
    roi_match = re.search(r"ROI:\s*([0-9]+)%", narrative)
    payback_match = re.search(r"Payback.*?([0-9]+)\s*months", narrative, re.IGNORECASE)

    return {
        "estimated_cost": int(cost_match.group(2).replace(",", "")) if cost_match else None,
        "roi_percentage": int(roi_match.group(1)) if roi_match else None,
        "payback_timeline": f"{payback_match.group(1)} months" if payback_match else None,
    }
