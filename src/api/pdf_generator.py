"""
PDF Report Generator for DesignROI

Generates a printable ROI summary for a single room renovation.
"""

from io import BytesIO
from datetime import datetime
from typing import List

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, HRFlowable
)
from reportlab.lib.enums import TA_CENTER, TA_LEFT

from calculator import (
    CalculationResult,
    compare_to_benchmarks,
    cost_shares,
    payback_status,
    roi_rating,
)


class PDFReportGenerator:
    """Generates PDF reports for ROI calculations."""

    # Brand colors
    PRIMARY_COLOR = colors.HexColor('#10B981')  # Green
    SECONDARY_COLOR = colors.HexColor('#1F2937')  # Dark gray
    LIGHT_GRAY = colors.HexColor('#F3F4F6')
    BORDER_COLOR = colors.HexColor('#E5E7EB')

    def __init__(self):
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Register the report paragraph styles on the sample sheet."""
        custom = (
            ('ReportTitle', 'Heading1', dict(fontSize=24, spaceAfter=20, alignment=TA_LEFT)),
            ('ReportSection', 'Heading2', dict(fontSize=14, spaceBefore=20, spaceAfter=10, borderPadding=5)),
            ('ReportBody', 'Normal', dict(fontSize=10, spaceAfter=6)),
            ('ReportSmall', 'Normal', dict(fontSize=8, textColor=colors.gray, spaceAfter=4)),
            ('ReportFooter', 'Normal', dict(fontSize=8, textColor=colors.gray, alignment=TA_CENTER)),
        )
        for name, parent, overrides in custom:
            options = {'textColor': self.SECONDARY_COLOR, **overrides}
            self.styles.add(ParagraphStyle(name=name, parent=self.styles[parent], **options))

    def _grid_style(self, *commands) -> TableStyle:
        """Table style with a brand header row, extra commands appended."""
        return TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), self.PRIMARY_COLOR),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('TEXTCOLOR', (0, 1), (-1, -1), self.SECONDARY_COLOR),
            ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
            ('GRID', (0, 0), (-1, -1), 0.5, self.BORDER_COLOR),
            *commands,
        ])

    def generate_report(self, result: CalculationResult, project_name: str = "Renovation ROI") -> BytesIO:
        """
        Generate a PDF report for an ROI calculation.

        Returns: BytesIO buffer containing the PDF
        """
        buffer = BytesIO()

        doc = SimpleDocTemplate(
            buffer,
            pagesize=letter,
            rightMargin=0.75*inch,
            leftMargin=0.75*inch,
            topMargin=0.75*inch,
            bottomMargin=0.75*inch
        )

        story = []
        story.extend(self._build_header(project_name, result))
        story.extend(self._build_summary(result))
        story.extend(self._build_cost_table(result))
        story.extend(self._build_market_table(result))
        story.extend(self._build_bullets('Recommendations', result.recommendations))
        story.extend(self._build_bullets('Risk Factors', result.risk_factors))
        story.extend(self._build_footer())

        doc.build(story)
        buffer.seek(0)
        return buffer

    def _build_header(self, project_name: str, result: CalculationResult) -> List:
        """Build the report header."""
        elements = []

        elements.append(Paragraph(
            '<font color="#10B981"><b>DesignROI</b></font>',
            ParagraphStyle(
                name='Brand',
                fontSize=20,
                textColor=self.PRIMARY_COLOR,
                spaceAfter=5
            )
        ))

        elements.append(Paragraph('Renovation Cost &amp; ROI Estimator', self.styles['ReportSmall']))
        elements.append(Spacer(1, 20))
        elements.append(Paragraph('<b>Renovation ROI Estimate</b>', self.styles['ReportTitle']))

        room_label = str(result.input.to_dict()['roomType']).replace('_', ' ').title()
        elements.append(Paragraph(f'<b>Project:</b> {project_name}', self.styles['ReportBody']))
        elements.append(Paragraph(
            f'<b>Room:</b> {room_label} ({result.input.square_footage:,.0f} sq ft)',
            self.styles['ReportBody']
        ))
        elements.append(Paragraph(
            f'<b>Generated:</b> {datetime.now().strftime("%B %d, %Y at %I:%M %p")}',
            self.styles['ReportBody']
        ))

        elements.append(Spacer(1, 10))
        elements.append(HRFlowable(
            width="100%",
            thickness=1,
            color=self.BORDER_COLOR,
            spaceAfter=20
        ))

        return elements

    def _build_summary(self, result: CalculationResult) -> List:
        """Build the ROI summary section."""
        elements = []
        metrics = result.roi_metrics

        elements.append(Paragraph('ROI Summary', self.styles['ReportSection']))

        summary_data = [
            ['Metric', 'Value'],
            ['Total Investment', f'${metrics.total_investment:,.0f}'],
            ['Estimated Value Increase', f'${metrics.estimated_value_increase:,.0f}'],
            ['ROI', f'{metrics.roi_percentage:.1f}% ({roi_rating(metrics.roi_percentage)})'],
            ['Payback Timeline', f'{metrics.payback_timeline_months} months ({payback_status(metrics.payback_timeline_months)})'],
            ['Annual Return', f'${metrics.annual_return:,.0f}'],
            ['5-Year Projection', f'${metrics.five_year_projection:,.0f}'],
        ]

        table = Table(summary_data, colWidths=[2.25*inch, 2.75*inch])
        table.setStyle(self._grid_style(
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('BACKGROUND', (0, 1), (0, -1), self.LIGHT_GRAY),
            ('FONTNAME', (0, 1), (0, -1), 'Helvetica-Bold'),
            ('ALIGN', (0, 0), (0, -1), 'LEFT'),
            ('TOPPADDING', (0, 0), (-1, -1), 7),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 7),
        ))

        elements.append(table)
        elements.append(Spacer(1, 20))

        return elements

    def _build_cost_table(self, result: CalculationResult) -> List:
        """Build the cost breakdown table."""
        elements = []
        breakdown = result.cost_breakdown
        shares = cost_shares(breakdown)

        elements.append(Paragraph('Cost Breakdown', self.styles['ReportSection']))

        data = [['Category', 'Amount', 'Share']]
        for name in ('materials', 'labor', 'permits', 'overhead', 'contingency'):
            data.append([
                name.title(),
                f"${getattr(breakdown, name):,.0f}",
                f"{shares[name]:.1f}%",
            ])
        data.append(['Total', f"${breakdown.total:,.0f}", ''])

        table = Table(data, colWidths=[2.5*inch, 1.75*inch, 1.25*inch])
        table.setStyle(self._grid_style(
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('TOPPADDING', (0, 0), (-1, 0), 8),
            ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
            ('ROWBACKGROUNDS', (0, 1), (-1, -2), [colors.white, self.LIGHT_GRAY]),
            ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
            ('TEXTCOLOR', (1, -1), (1, -1), self.PRIMARY_COLOR),
            ('LINEABOVE', (0, -1), (-1, -1), 1, self.BORDER_COLOR),
        ))

        elements.append(table)
        elements.append(Spacer(1, 20))

        return elements

    def _build_market_table(self, result: CalculationResult) -> List:
        """Build the market comparison table."""
        elements = []

        elements.append(Paragraph('Market Comparison', self.styles['ReportSection']))

        labels = {'roi': 'ROI %', 'cost': 'Cost', 'timeline': 'Payback (months)'}
        data = [['Metric', 'Your Project', 'Market Average', 'Difference']]
        for delta in compare_to_benchmarks(result.roi_metrics, result.market_comparison):
            if delta.metric == 'cost':
                user, market = f"${delta.user:,.0f}", f"${delta.market:,.0f}"
            else:
                user, market = f"{delta.user:,.1f}", f"{delta.market:,.1f}"
            data.append([labels[delta.metric], user, market, delta.label])

        table = Table(data, colWidths=[1.5*inch, 1.5*inch, 1.5*inch, 2*inch])
        table.setStyle(self._grid_style(
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('TOPPADDING', (0, 0), (-1, -1), 6),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ))

        elements.append(table)
        elements.append(Paragraph(
            f'Benchmark confidence: {result.market_comparison.confidence_level}%',
            self.styles['ReportSmall']
        ))
        elements.append(Spacer(1, 10))

        return elements

    def _build_bullets(self, title: str, items: List[str]) -> List:
        """Build a titled bullet list; skipped when empty."""
        if not items:
            return []

        elements = [Paragraph(title, self.styles['ReportSection'])]
        for item in items:
            elements.append(Paragraph(f'&bull; {item}', self.styles['ReportBody']))
        return elements

    def _build_footer(self) -> List:
        """Build the report footer with disclaimer."""
        elements = []

        elements.append(HRFlowable(
            width="100%",
            thickness=1,
            color=self.BORDER_COLOR,
            spaceBefore=20,
            spaceAfter=15
        ))

        disclaimer = """
        <b>Disclaimer:</b> This estimate uses regional averages and industry benchmarks and is
        intended for planning purposes only. Actual costs and returns vary with local labor rates,
        material availability, site conditions and market movement. Obtain quotes from licensed
        contractors and a local appraisal before making final decisions.
        """

        elements.append(Paragraph(disclaimer.strip(), self.styles['ReportSmall']))
        elements.append(Spacer(1, 15))
        elements.append(Paragraph('Generated by DesignROI', self.styles['ReportFooter']))

        return elements
