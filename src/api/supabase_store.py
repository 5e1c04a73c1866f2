"""
Supabase ROI Store for DesignROI

Persists ROI calculations against a design and verifies the caller's
access token through Supabase auth.
"""

import os
import json
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from dotenv import load_dotenv
from supabase import create_client, Client

load_dotenv()

# Supabase configuration
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY", "")

ROI_TABLE = "roi_calculations"

# Initialize Supabase client (will be None if not configured)
supabase: Optional[Client] = None


def get_supabase_client() -> Optional[Client]:
    """Get or create Supabase client."""
    global supabase
    if supabase is None and SUPABASE_URL and SUPABASE_SERVICE_KEY:
        supabase = create_client(SUPABASE_URL, SUPABASE_SERVICE_KEY)
    return supabase


class ROIStoreError(Exception):
    """Raised when the ROI store cannot complete a read or write."""


class SupabaseROIStore:
    """ROI calculation store backed by Supabase."""

    def __init__(self, client: Optional[Client] = None):
        self.client = client or get_supabase_client()
        if not self.client:
            print("Warning: Supabase client not initialized. Check SUPABASE_URL and SUPABASE_SERVICE_KEY.")

    def _require_client(self) -> Client:
        if not self.client:
            raise ROIStoreError("Supabase client not configured")
        return self.client

    # =========================================================================
    # Auth
    # =========================================================================

    def get_user_from_token(self, access_token: str) -> Optional[Dict[str, Any]]:
        """Resolve a bearer token to the Supabase user, or None if invalid."""
        if not self.client or not access_token:
            return None
        try:
            response = self.client.auth.get_user(access_token)
        except Exception as e:
            print(f"Error verifying access token: {e}")
            return None

        user = getattr(response, "user", None)
        if not user:
            return None
        return {"id": user.id, "email": getattr(user, "email", None)}

    # =========================================================================
    # ROI Calculations
    # =========================================================================

    @staticmethod
    def build_record(result) -> Dict[str, Any]:
        """Flatten a CalculationResult into a roi_calculations row (without design_id)."""
        data = result.to_dict()
        return {
            "estimated_cost": result.cost_breakdown.total,
            "roi_percentage": result.roi_metrics.roi_percentage,
            "payback_timeline": f"{result.roi_metrics.payback_timeline_months} months",
            "cost_breakdown": json.dumps(data["costBreakdown"]),
            "notes": json.dumps({
                "recommendations": data["recommendations"],
                "riskFactors": data["riskFactors"],
                "marketComparison": data["marketComparison"],
                "input": data["input"],
            }),
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }

    def save_calculation(self, design_id: str, result) -> Dict[str, Any]:
        """Insert or replace the calculation stored for a design."""
        client = self._require_client()
        record = {"design_id": design_id, **self.build_record(result)}
        try:
            response = client.table(ROI_TABLE).upsert(record, on_conflict="design_id").execute()
        except Exception as e:
            print(f"Error saving ROI calculation: {e}")
            raise ROIStoreError(str(e)) from e
        return response.data[0] if response.data else record

    def get_calculation(self, design_id: str) -> Optional[Dict[str, Any]]:
        """Get the calculation stored for a design, or None if there is none."""
        client = self._require_client()
        try:
            response = client.table(ROI_TABLE).select("*").eq("design_id", design_id).limit(1).execute()
        except Exception as e:
            print(f"Error fetching ROI calculation: {e}")
            raise ROIStoreError(str(e)) from e
        return response.data[0] if response.data else None

    def update_calculation(self, design_id: str, result) -> Optional[Dict[str, Any]]:
        """Overwrite the calculation stored for a design."""
        client = self._require_client()
        try:
            response = client.table(ROI_TABLE).update(self.build_record(result)).eq("design_id", design_id).execute()
        except Exception as e:
            print(f"Error updating ROI calculation: {e}")
            raise ROIStoreError(str(e)) from e
        return response.data[0] if response.data else None


# Global store instance
roi_store = SupabaseROIStore()
