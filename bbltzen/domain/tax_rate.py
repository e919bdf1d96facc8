"""
Tax Rate Domain Model
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime
from decimal import Decimal


class TaxRate(BaseModel):
    """Tax rate (aliquota) - rate is a percentage, 22.00 means 22%"""

    id: int = Field(..., description="Tax rate ID")
    rate: Decimal = Field(..., description="Tax percentage", ge=0, le=100)
    description: str = Field(..., description="Tax rate description")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    @property
    def label(self) -> str:
        """Display label, e.g. '22.00% - IVA ordinaria'"""
        return f"{self.rate:.2f}% - {self.description}"

    def to_dict(self) -> dict:
        data = self.model_dump()
        data['rate'] = float(data['rate'])
        data['label'] = self.label
        for field in ['created_at', 'updated_at']:
            if data.get(field):
                data[field] = data[field].isoformat()
        return data
