# showroom/models.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List


class ProductDetails(BaseModel):
    # Store rows and model replies sometimes carry numbers here (mileage: 12000)
    model_config = ConfigDict(coerce_numbers_to_str=True)

    mileage: Optional[str] = None
    transmission: Optional[str] = None
    fuel: Optional[str] = None


class Product(BaseModel):
    """A vehicle row from the ``products`` table.

    English fields are the primary content; the ``*_ar`` columns are optional
    Arabic overrides and may be missing, null or empty.
    """

    id: int
    name: str
    description: str = ""
    name_ar: Optional[str] = None
    description_ar: Optional[str] = None
    details: ProductDetails = Field(default_factory=ProductDetails)
    details_ar: Optional[ProductDetails] = None
    price_usd: float = Field(default=0, ge=0)
    category: Optional[str] = None
    category_ar: Optional[str] = None
    featured: bool = False
    image_url: Optional[str] = None
    gallery: List[str] = Field(default_factory=list)
    created_at: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, v):
        return "" if v is None else v

    @field_validator("details", mode="before")
    @classmethod
    def _null_details(cls, v):
        return {} if v is None else v

    @field_validator("gallery", mode="before")
    @classmethod
    def _null_gallery(cls, v):
        return [] if v is None else v

    @field_validator("featured", mode="before")
    @classmethod
    def _null_featured(cls, v):
        return False if v is None else v


class DisplayDetails(BaseModel):
    mileage: str = ""
    transmission: str = ""
    fuel: str = ""


class DisplayContent(BaseModel):
    name: str
    description: str
    details: DisplayDetails


class ProductCard(BaseModel):
    id: int
    name: str
    description: str
    details: DisplayDetails
    category: Optional[str] = None
    category_key: Optional[str] = None
    price_usd: float
    price: str
    featured: bool = False
    favorite: bool = False
    image_url: Optional[str] = None
    gallery: List[str] = Field(default_factory=list)


class Inquiry(BaseModel):
    id: Optional[int] = None
    name: str
    email: str
    phone: Optional[str] = None
    vehicle_name: Optional[str] = None
    message: Optional[str] = None
    created_at: Optional[str] = None
