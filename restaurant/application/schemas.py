from datetime import date, datetime, time
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, EmailStr, Field

from restaurant.application.validation import parse_date, parse_time, parse_uuid

Role = Literal["admin", "staff", "customer"]
TableLocation = Literal["indoor", "outdoor"]
TableStatus = Literal["available", "reserved", "out of service"]
ReservationState = Literal["pending", "confirmed", "canceled"]
OrderState = Literal["processing", "success", "failed"]
MenuCategory = Literal[
    "main", "appetizer", "dessert", "drink", "snack", "vegetarian", "kids", "local",
    "special", "combo", "breakfast", "healthy", "international", "seafood", "spicy",
]


def _date_in(value):
    return parse_date(value) if isinstance(value, str) else value


def _time_in(value):
    return parse_time(value) if isinstance(value, str) else value


Email = Annotated[EmailStr, AfterValidator(str.lower)]
UUIDStr = Annotated[str, AfterValidator(parse_uuid)]
DateStr = Annotated[date, BeforeValidator(_date_in)]
TimeStr = Annotated[time, BeforeValidator(_time_in)]


# ---------- auth / users ----------

class LoginRequest(BaseModel):
    email: Email
    password: str = Field(min_length=1)


class UserCreate(BaseModel):
    name: str = Field(min_length=3, max_length=100)
    email: Email
    password: str = Field(min_length=6, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=100)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=100)
    email: Optional[Email] = None
    password: Optional[str] = Field(default=None, min_length=6, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=100)
    role: Optional[Role] = None


class UserRead(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    role: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    user: UserRead
    token: str


# ---------- tables ----------

class TableCreate(BaseModel):
    number: str = Field(min_length=1, max_length=20)
    capacity: int = Field(gt=0)
    location: TableLocation
    status: TableStatus = "available"


class TableUpdate(BaseModel):
    number: Optional[str] = Field(default=None, min_length=1, max_length=20)
    capacity: Optional[int] = Field(default=None, gt=0)
    location: Optional[TableLocation] = None
    status: Optional[TableStatus] = None


class TableRead(BaseModel):
    id: str
    number: str
    capacity: int
    location: str
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ---------- menu ----------

class MenuCreate(BaseModel):
    name: str = Field(min_length=3, max_length=100)
    description: str = Field(min_length=3, max_length=1000)
    price: float = Field(gt=0)
    category: MenuCategory


class MenuUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=100)
    description: Optional[str] = Field(default=None, min_length=3, max_length=1000)
    price: Optional[float] = Field(default=None, gt=0)
    category: Optional[MenuCategory] = None


class MenuRead(BaseModel):
    id: str
    name: str
    description: str
    price: float
    category: str
    image_url: Optional[str] = None
    rating: float
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ---------- ingredients / inventory ----------

class IngredientCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = ""


class IngredientUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None


class IngredientRead(BaseModel):
    id: str
    name: str
    description: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class InventoryCreate(BaseModel):
    ingredient_id: UUIDStr
    quantity: float = Field(ge=0, allow_inf_nan=False)


class InventoryUpdate(BaseModel):
    quantity: float = Field(ge=0, allow_inf_nan=False)


class InventoryRead(BaseModel):
    id: str
    ingredient_id: str
    quantity: float
    ingredient: IngredientRead
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ---------- recipes ----------

class RecipeIngredientIn(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    quantity: float = Field(gt=0, allow_inf_nan=False)
    description: Optional[str] = None


class RecipeCreate(BaseModel):
    menu_id: UUIDStr
    name: str = Field(min_length=3, max_length=100)
    description: str = ""
    ingredients: list[RecipeIngredientIn] = Field(min_length=1)


class RecipeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=100)
    description: Optional[str] = None
    ingredients: Optional[list[RecipeIngredientIn]] = None


class RecipeIngredientRead(BaseModel):
    ingredient_id: str
    name: str
    quantity: float
    position: int

    class Config:
        from_attributes = True


class RecipeRead(BaseModel):
    id: str
    menu_id: str
    name: str
    description: str
    ingredients: list[RecipeIngredientRead] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class InventoryMenuLine(BaseModel):
    ingredient_id: str
    name: str
    quantity_per_portion: float
    available: float
    portions: float


class InventoryMenuRead(BaseModel):
    total_portions: int
    menu: MenuRead
    recipe: RecipeRead
    ingredients: list[InventoryMenuLine]


# ---------- reservations ----------

class ReservationCreate(BaseModel):
    table_id: UUIDStr
    reservation_date: DateStr
    reservation_time: TimeStr
    number_of_guests: int = Field(gt=0)


class ReservationUpdate(BaseModel):
    status: Optional[ReservationState] = None
    number_of_guests: Optional[int] = Field(default=None, gt=0)
    reservation_date: Optional[DateStr] = None
    reservation_time: Optional[TimeStr] = None


class ReservationRead(BaseModel):
    id: str
    table_id: str
    user_id: str
    reservation_date: date
    reservation_time: time
    number_of_guests: int
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ---------- orders ----------

class OrderItemIn(BaseModel):
    menu_id: UUIDStr
    quantity: int = Field(gt=0)


class OrderCreate(BaseModel):
    items: list[OrderItemIn] = Field(min_length=1)


class OrderStatusUpdate(BaseModel):
    status: Optional[OrderState] = None


class OrderPaymentUpdate(BaseModel):
    payment_method: Optional[str] = Field(default=None, max_length=50)


class OrderItemRead(BaseModel):
    menu_id: str
    quantity: int

    class Config:
        from_attributes = True


class OrderRead(BaseModel):
    id: str
    user_id: str
    status: str
    payment_method: Optional[str] = None
    payment_status: str
    amount: float
    items: list[OrderItemRead] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ---------- reviews ----------

class ReviewCreate(BaseModel):
    menu_id: UUIDStr
    order_id: UUIDStr
    rating: int = Field(ge=1, le=5)
    comment: str = Field(min_length=3, max_length=100)


class ReviewUpdate(BaseModel):
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    comment: Optional[str] = Field(default=None, min_length=3, max_length=100)


class ReviewRead(BaseModel):
    id: str
    rating: int
    comment: str
    user_id: str
    menu_id: str
    order_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
