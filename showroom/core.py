from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List, Union, Literal

from showroom.models import ProductDetails

Language = Literal["en", "ar"]
Currency = Literal["USD", "EGP"]
Theme = Literal["light", "dark"]

PRIMARY_LANGUAGE = "en"
SECONDARY_LANGUAGE = "ar"
EXCHANGE_RATE_KEY = "USD_TO_EGP"
PLACEHOLDER_IMAGE = "https://placehold.co/600x400?text=No+Image"

# ---------------------------
# Translation proxy schemas
# ---------------------------
class TranslateProductIn(BaseModel):
    name: Optional[str] = ""
    description: Optional[str] = ""
    details: Optional[ProductDetails] = None

class ProductTranslation(BaseModel):
    name_ar: Optional[str] = None
    description_ar: Optional[str] = None
    details_ar: Optional[ProductDetails] = None

class TranslateTextIn(BaseModel):
    text: Union[str, List[str], None] = None
    target_lang: str = "ar"

class TranslatedTextOut(BaseModel):
    translatedText: Union[str, List[str]]

class ErrorOut(BaseModel):
    error: str

# ---------------------------
# Admin / contact schemas
# ---------------------------
class ProductIn(BaseModel):
    name: str
    price_usd: float = Field(ge=0)
    category: Optional[str] = None
    featured: bool = False
    description: Optional[str] = ""
    details: ProductDetails = Field(default_factory=ProductDetails)
    image_url: Optional[str] = None

class ExchangeRateIn(BaseModel):
    value: float

class InquiryIn(BaseModel):
    name: str
    email: str
    phone: Optional[str] = None
    vehicle_name: Optional[str] = None
    message: Optional[str] = None

def _make_product_row(p: ProductIn, is_new: bool) -> Dict[str, Any]:
    row: Dict[str, Any] = {
        "name": p.name,
        "price_usd": p.price_usd,
        "category": p.category,
        "featured": p.featured,
        "description": p.description or "",
        "details": p.details.model_dump(),
    }
    if p.image_url:
        row["image_url"] = p.image_url
        if is_new:
            row["gallery"] = [p.image_url]
    elif is_new:
        row["image_url"] = PLACEHOLDER_IMAGE
        row["gallery"] = []
    return row
