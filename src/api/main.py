"""
DesignROI - FastAPI Backend API

This API provides endpoints for renovation cost and ROI calculation,
stored results per design, industry benchmarks, PDF reports and
written ROI summaries.
"""

import os
import sys
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone
from enum import Enum

from dotenv import load_dotenv
from fastapi import FastAPI, Depends, Query, Request, Header
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, ConfigDict, Field

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from calculator import (
    ROICalculator,
    ROIDatabase,
    CalculationInput,
    MultiRoomInput,
    compare_quality_levels,
    compare_to_benchmarks,
    payback_status,
    roi_rating,
    value_projection,
    cost_shares,
)
from api.pdf_generator import PDFReportGenerator
from api.supabase_store import roi_store, ROIStoreError
from narrative.roi_narrative import ROINarrativeWriter, parse_roi_metrics

load_dotenv()

API_VERSION = "1.0.0"

# Initialize FastAPI app
app = FastAPI(
    title="DesignROI API",
    description="Renovation cost estimation and return-on-investment analysis",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ALLOW_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services
pdf_generator = PDFReportGenerator()
narrative_writer = ROINarrativeWriter()


# ============================================================================
# Pydantic Models
# ============================================================================

class QualityLevelEnum(str, Enum):
    budget = "budget"
    mid_range = "mid-range"
    luxury = "luxury"


class ROIInputModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    room_type: str = Field(..., alias="roomType")
    room_size: str = Field(..., alias="roomSize")
    style: str
    current_property_value: float = Field(..., gt=0, alias="currentPropertyValue")
    square_footage: float = Field(..., gt=0, alias="squareFootage")
    region: Optional[str] = None
    quality_level: Optional[QualityLevelEnum] = Field(None, alias="qualityLevel")
    timeline: Optional[int] = None

    def to_calculation_input(self) -> CalculationInput:
        return CalculationInput(**self._fields())

    def _fields(self) -> Dict[str, Any]:
        return {
            "room_type": self.room_type,
            "room_size": self.room_size,
            "style": self.style,
            "square_footage": self.square_footage,
            "current_property_value": self.current_property_value,
            "region": self.region or "suburban",
            "quality_level": self.quality_level.value if self.quality_level else "mid-range",
            "timeline": self.timeline,
        }


class MultiRoomInputModel(ROIInputModel):
    priority: int = 0

    def to_calculation_input(self) -> MultiRoomInput:
        return MultiRoomInput(priority=self.priority, **self._fields())


class ROICalculationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    design_id: Optional[str] = Field(None, alias="designId")
    input: ROIInputModel


class MultiRoomRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rooms: List[MultiRoomInputModel]
    total_budget: float = Field(..., ge=0, alias="totalBudget")


class ROIReportRequest(ROICalculationRequest):
    project_name: str = Field("Renovation ROI", alias="projectName")


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str


# ============================================================================
# Helpers
# ============================================================================

def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    """JSON error envelope carrying a success flag."""
    return JSONResponse(status_code=status_code, content={"success": False, "error": message, **extra})


def plain_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return error_response(400, "Invalid input data", details=jsonable_encoder(exc.errors()))


class UnauthorizedError(Exception):
    """Raised when a request carries no valid bearer token."""


@app.exception_handler(UnauthorizedError)
async def unauthorized_handler(request: Request, exc: UnauthorizedError):
    return plain_error(401, "Unauthorized")


def get_current_user(authorization: Optional[str] = Header(None)) -> Dict[str, Any]:
    """
    Resolve the bearer token on the request to a Supabase user.

    Dependencies run before the request body is validated, so a missing or
    rejected token is reported as 401 even when the body is also invalid.
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise UnauthorizedError()
    token = authorization.split(" ", 1)[1].strip()
    user = roi_store.get_user_from_token(token)
    if not user:
        raise UnauthorizedError()
    return user


def result_payload(result) -> Dict[str, Any]:
    """Serialize a calculation result with its display insights."""
    payload = result.to_dict()
    metrics = result.roi_metrics
    payload["insights"] = {
        "roiRating": roi_rating(metrics.roi_percentage),
        "paybackStatus": payback_status(metrics.payback_timeline_months),
        "costShares": cost_shares(result.cost_breakdown),
        "benchmarkComparison": [
            {
                "metric": delta.metric,
                "user": delta.user,
                "market": delta.market,
                "difference": delta.difference,
                "isFavorable": delta.is_favorable,
                "label": delta.label,
            }
            for delta in compare_to_benchmarks(metrics, result.market_comparison)
        ],
        "valueProjection": [
            {"month": p.month, "year": p.year, "value": p.value, "cumulative": p.cumulative}
            for p in value_projection(metrics)
        ],
        "qualityComparison": compare_quality_levels(result.input),
    }
    return payload


# ============================================================================
# API Endpoints
# ============================================================================

@app.get("/", response_model=HealthResponse)
async def root():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now().isoformat(),
        version=API_VERSION
    )


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now().isoformat(),
        version=API_VERSION
    )


@app.post("/api/roi/calculate")
async def calculate_roi(request: ROICalculationRequest, user: dict = Depends(get_current_user)):
    """
    Calculate renovation cost and ROI for one room.

    When a designId is supplied the result is stored against that design.
    Returns: {success, result}
    """
    try:
        result = ROICalculator.calculate_roi(request.input.to_calculation_input())

        if request.design_id:
            try:
                roi_store.save_calculation(request.design_id, result)
            except ROIStoreError as e:
                print(f"Error saving ROI calculation: {e}")
                return error_response(500, "Failed to save ROI calculation")

        return {"success": True, "result": result_payload(result)}

    except Exception as e:
        print(f"ROI calculation error: {e}")
        return error_response(500, "Internal server error")


@app.get("/api/roi/calculate")
async def get_roi_calculation(
    design_id: Optional[str] = Query(None, alias="designId"),
    user: dict = Depends(get_current_user)
):
    """
    Fetch the stored ROI calculation for a design.

    Returns: {success, data} or 404 when nothing is stored
    """
    if not design_id:
        return error_response(400, "Design ID is required")

    try:
        row = roi_store.get_calculation(design_id)
    except ROIStoreError as e:
        print(f"Error fetching ROI calculation: {e}")
        return error_response(500, "Internal server error")

    if row is None:
        return plain_error(404, "ROI calculation not found")

    return {"success": True, "data": row}


@app.put("/api/roi/calculate")
async def update_roi_calculation(request: ROICalculationRequest, user: dict = Depends(get_current_user)):
    """
    Recalculate and overwrite the stored ROI calculation for a design.

    Returns: {success, result}
    """
    if not request.design_id:
        return error_response(400, "Design ID is required for updates")

    try:
        result = ROICalculator.calculate_roi(request.input.to_calculation_input())
        roi_store.update_calculation(request.design_id, result)
        return {"success": True, "result": result_payload(result)}
    except Exception as e:
        print(f"Error updating ROI calculation: {e}")
        return error_response(500, "Internal server error")


@app.post("/api/roi/calculate-multi")
async def calculate_multi_room(request: MultiRoomRequest, user: dict = Depends(get_current_user)):
    """
    Calculate several rooms and combine them into one project summary.

    Returns: {success, result: {individual, combined}}
    """
    try:
        rooms = [room.to_calculation_input() for room in request.rooms]
        result = ROICalculator.calculate_multi_room_roi(rooms, request.total_budget)
        return {"success": True, "result": result.to_dict()}
    except Exception as e:
        print(f"Multi-room ROI calculation error: {e}")
        return error_response(500, "Internal server error")


@app.get("/api/roi/benchmarks")
async def get_benchmarks(
    room_type: str = Query("living_room", alias="roomType"),
    region: str = Query("suburban"),
    user: dict = Depends(get_current_user)
):
    """
    Industry benchmarks for a room type and region.

    Returns: basic comparison, detailed room figures, regional context
    and general market insights
    """
    basic = ROICalculator.get_market_comparison(room_type, region)
    detailed = ROIDatabase.get_detailed_benchmark(room_type)
    regional = ROIDatabase.get_regional_market_data(region)

    return {
        "success": True,
        "data": {
            "basic": basic.to_dict(),
            "detailed": {
                "averageROI": detailed.average_roi,
                "averageCost": detailed.average_cost,
                "averageTimeframe": detailed.average_timeframe,
                "popularFeatures": list(detailed.popular_features),
                "costRange": {"min": detailed.cost_range[0], "max": detailed.cost_range[1]},
                "roiRange": {"min": detailed.roi_range[0], "max": detailed.roi_range[1]},
            },
            "regional": {
                "costMultiplier": regional.cost_multiplier,
                "marketTrends": regional.market_trends,
                "topFeatures": list(regional.top_features),
            },
            "marketInsights": {
                "trendingFeatures": list(detailed.popular_features),
                "costFactors": list(ROIDatabase.COST_FACTORS),
                "roiFactors": list(ROIDatabase.ROI_INFLUENCES),
            },
            "lastUpdated": datetime.now(timezone.utc).isoformat(),
        },
    }


@app.post("/api/roi/report")
async def generate_roi_report(request: ROIReportRequest, user: dict = Depends(get_current_user)):
    """
    Generate a PDF report for an ROI calculation.

    Returns: PDF file as a downloadable stream
    """
    try:
        result = ROICalculator.calculate_roi(request.input.to_calculation_input())
        pdf_buffer = pdf_generator.generate_report(result, project_name=request.project_name)

        # Create filename for download
        safe_project_name = "".join(c for c in request.project_name if c.isalnum() or c in (' ', '-', '_')).rstrip()
        download_filename = f"{safe_project_name or 'roi'}_report.pdf"

        return StreamingResponse(
            pdf_buffer,
            media_type="application/pdf",
            headers={
                "Content-Disposition": f'attachment; filename="{download_filename}"'
            }
        )

    except Exception as e:
        print(f"ROI report error: {e}")
        return error_response(500, "Internal server error")


@app.post("/api/roi/narrative")
async def generate_roi_narrative(request: ROICalculationRequest, user: dict = Depends(get_current_user)):
    """
    Write a plain-language summary of an ROI calculation.

    Returns: {success, narrative, metrics}
    """
    try:
        result = ROICalculator.calculate_roi(request.input.to_calculation_input())
        narrative = narrative_writer.generate(result)
        return {"success": True, "narrative": narrative, "metrics": parse_roi_metrics(narrative)}
    except Exception as e:
        print(f"ROI narrative error: {e}")
        return error_response(500, "Internal server error")


# ============================================================================
# Run server
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
