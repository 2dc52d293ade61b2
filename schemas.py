"""
Database Schemas

MongoDB collection schemas defined as Pydantic models. They validate request
bodies before anything is written to the database.

Each model represents a collection; the collection name is the model name in
lowercase (snake_case for multi-word names):
- Event -> "event" collection
- ContactMessage -> "contact_message" collection
- ShopSettings -> "shop_settings" collection

The matching ``*Update`` models carry the same fields, all optional, and are
used for partial updates.
"""

from datetime import datetime
from typing import List, Literal, Optional

from bson import ObjectId
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from database import utcnow

EventStatus = Literal["upcoming", "ongoing", "completed", "cancelled"]
MemberRole = Literal["Player", "Coach", "Content Creator", "Social Media Manager"]
TeamStatus = Literal["active", "inactive", "pending"]
NewsCategory = Literal["announcement", "event", "team", "community", "partnership"]
PartnerType = Literal["partner", "sponsor"]
ProductCategory = Literal["jerseys", "accessories", "peripherals"]
OrderStatus = Literal["pending", "confirmed", "shipped", "delivered", "cancelled"]
RegistrationStatus = Literal["pending", "approved", "rejected"]
ContactCategory = Literal["general", "support", "partnership", "events", "other"]
VideoCategory = Literal["gameplay", "tournament", "interview", "highlights", "tutorial", "stream"]
ThumbnailType = Literal["image", "video"]

# Roles that are attached to a single game roster
ROSTER_ROLES = ("Player", "Coach")


def _member_ids(v: Optional[List[str]]) -> Optional[List[str]]:
    for member_id in v or []:
        if not ObjectId.is_valid(member_id):
            raise ValueError(f"Invalid member id: {member_id}")
    return v


def _game_name(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Game name is required")
    return v


class Event(BaseModel):
    """
    Events collection schema
    Collection name: "event"
    """
    name: str = Field(..., min_length=1, description="Tournament name")
    description: str = Field(..., description="Event description")
    image: str = Field("", description="Banner image path or URL")
    game: str = Field(..., description="Game played at the event")
    start_date: datetime = Field(..., description="Start of the event")
    end_date: datetime = Field(..., description="End of the event")
    location: str = Field(..., description="Venue or 'Online'")
    status: EventStatus = Field("upcoming", description="Lifecycle status")
    teams: List[str] = Field(default_factory=list, description="Participating team names")
    prize_pool: float = Field(0, ge=0, description="Prize pool amount")
    format: str = Field(..., description="Competition format")
    registration_deadline: datetime = Field(..., description="Last moment to register")
    is_public: bool = Field(True, description="Whether the event is listed publicly")


class EventUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    game: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    status: Optional[EventStatus] = None
    teams: Optional[List[str]] = None
    prize_pool: Optional[float] = Field(None, ge=0)
    format: Optional[str] = None
    registration_deadline: Optional[datetime] = None
    is_public: Optional[bool] = None


class SocialLinks(BaseModel):
    twitter: str = ""
    instagram: str = ""
    twitch: str = ""
    youtube: str = ""
    discord: str = ""


class Member(BaseModel):
    """
    Members collection schema
    Collection name: "member"
    """
    username: str = Field(..., min_length=1, description="Unique gamer tag")
    full_name: str = Field(..., min_length=1, description="Real name")
    avatar: str = Field("", description="Avatar image path or URL")
    role: MemberRole = Field(..., description="Role in the organization")
    primary_game: Optional[str] = Field(None, description="Roster game for players and coaches")
    secondary_games: List[str] = Field(default_factory=list)
    rank: str = Field("Rookie")
    bio: str = Field("")
    achievements: List[str] = Field(default_factory=list)
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    join_date: datetime = Field(default_factory=utcnow)

    @field_validator("username", "full_name")
    @classmethod
    def strip_names(cls, v: str) -> str:
        return v.strip()

    @model_validator(mode="after")
    def clear_game_for_staff(self):
        if self.role not in ROSTER_ROLES:
            self.primary_game = None
        return self


class MemberUpdate(BaseModel):
    username: Optional[str] = None
    full_name: Optional[str] = None
    avatar: Optional[str] = None
    role: Optional[MemberRole] = None
    primary_game: Optional[str] = None
    secondary_games: Optional[List[str]] = None
    rank: Optional[str] = None
    bio: Optional[str] = None
    achievements: Optional[List[str]] = None
    social_links: Optional[SocialLinks] = None
    join_date: Optional[datetime] = None


class TeamAchievement(BaseModel):
    title: str
    date: datetime = Field(default_factory=utcnow)
    description: str


class Team(BaseModel):
    """
    Teams collection schema
    Collection name: "team" (one team per game)
    """
    name: str = Field(..., min_length=1)
    game: str = Field(..., min_length=1, description="Game this roster competes in")
    description: str
    logo: str = ""
    status: TeamStatus = "active"
    members: List[str] = Field(default_factory=list, description="Member ids on the roster")
    achievements: List[TeamAchievement] = Field(default_factory=list)

    check_members = field_validator("members")(_member_ids)


class TeamUpdate(BaseModel):
    name: Optional[str] = None
    game: Optional[str] = None
    description: Optional[str] = None
    logo: Optional[str] = None
    status: Optional[TeamStatus] = None
    members: Optional[List[str]] = None
    achievements: Optional[List[TeamAchievement]] = None

    check_members = field_validator("members")(_member_ids)


class Game(BaseModel):
    """
    Games collection schema
    Collection name: "game"
    """
    name: str = Field(..., description="Game title, unique regardless of case")
    featured: bool = False
    order: int = 0

    check_name = field_validator("name")(_game_name)


class GameUpdate(BaseModel):
    name: Optional[str] = None
    featured: Optional[bool] = None
    order: Optional[int] = None

    check_name = field_validator("name")(_game_name)


class GameOrderItem(BaseModel):
    id: str
    order: int


class GameOrderUpdate(BaseModel):
    games: List[GameOrderItem]


class News(BaseModel):
    """
    News collection schema
    Collection name: "news"
    """
    title: str = Field(..., min_length=1)
    excerpt: str = Field(..., min_length=1, max_length=150)
    content: str = Field(..., min_length=1)
    image: str = Field(..., description="Featured image path")
    date: datetime = Field(default_factory=utcnow)
    author: str = "Admin"
    category: NewsCategory = "announcement"
    published: bool = False


class NewsUpdate(BaseModel):
    title: Optional[str] = None
    excerpt: Optional[str] = Field(None, max_length=150)
    content: Optional[str] = None
    image: Optional[str] = None
    date: Optional[datetime] = None
    author: Optional[str] = None
    category: Optional[NewsCategory] = None
    published: Optional[bool] = None


class PublishToggle(BaseModel):
    published: bool


class Partner(BaseModel):
    """
    Partners collection schema
    Collection name: "partner" (partners and sponsors share it)
    """
    name: str = Field(..., min_length=1)
    type: PartnerType
    tier: str
    logo: str = ""
    website: str
    description: str
    long_description: str = ""
    founded_year: Optional[int] = None
    headquarters: str = ""
    industry: str = ""
    partner_since: datetime = Field(default_factory=utcnow)
    key_projects: List[str] = Field(default_factory=list)
    team_collaborations: List[str] = Field(default_factory=list)
    active: bool = True


class PartnerUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[PartnerType] = None
    tier: Optional[str] = None
    logo: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    long_description: Optional[str] = None
    founded_year: Optional[int] = None
    headquarters: Optional[str] = None
    industry: Optional[str] = None
    partner_since: Optional[datetime] = None
    key_projects: Optional[List[str]] = None
    team_collaborations: Optional[List[str]] = None
    active: Optional[bool] = None


class Product(BaseModel):
    """
    Products collection schema
    Collection name: "product"
    """
    name: str = Field(..., min_length=1, description="Product name")
    description: str = Field(..., description="Product description")
    category: ProductCategory = Field(..., description="Shop category")
    price: float = Field(..., ge=0, description="Unit price")
    image: str = Field(..., description="Image path or URL")
    stock: int = Field(0, ge=0, description="Units available in inventory")
    rating: float = Field(0, ge=0, le=5)


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[ProductCategory] = None
    price: Optional[float] = Field(None, ge=0)
    image: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)


class OrderItem(BaseModel):
    product_id: str = Field(..., description="Referenced product _id as string")
    name: str = Field(..., description="Snapshot of product name at order time")
    price: float = Field(..., ge=0, description="Unit price at order time")
    quantity: int = Field(..., ge=1)


class Order(BaseModel):
    """
    Orders collection schema
    Collection name: "order"
    """
    customer_name: str
    customer_email: Optional[EmailStr] = None
    customer_phone: str
    customer_location: str
    items: List[OrderItem] = Field(default_factory=list)
    total_amount: float = Field(..., ge=0)
    status: OrderStatus = "pending"
    notes: Optional[str] = None


class CartItem(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)


class OrderCreate(BaseModel):
    customer_name: str = Field(..., min_length=1)
    customer_email: Optional[EmailStr] = None
    customer_phone: str = Field(..., min_length=1)
    customer_location: str = Field(..., min_length=1)
    items: List[CartItem] = Field(..., min_length=1)
    notes: Optional[str] = None


class OrderUpdate(BaseModel):
    status: Optional[OrderStatus] = None
    notes: Optional[str] = None


class Registration(BaseModel):
    """
    Registrations collection schema
    Collection name: "registration"
    """
    event_id: str = Field(..., description="Referenced event _id")
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone_number: str = Field(..., min_length=1)
    game_name: str = Field(..., min_length=1, description="In-game name")
    game_id: Optional[str] = None
    team: Optional[str] = None
    message: Optional[str] = None
    status: RegistrationStatus = "pending"

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class RegistrationCreate(BaseModel):
    event_id: str
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone_number: str = Field(..., min_length=1)
    game_name: str = Field(..., min_length=1)
    game_id: Optional[str] = None
    team: Optional[str] = None
    message: Optional[str] = None


class RegistrationStatusUpdate(BaseModel):
    status: RegistrationStatus


class BulkStatusUpdate(BaseModel):
    registration_ids: List[str] = Field(..., min_length=1)
    status: RegistrationStatus


class BulkDelete(BaseModel):
    registration_ids: List[str] = Field(..., min_length=1)


class ContactMessage(BaseModel):
    """
    Contact messages collection schema
    Collection name: "contact_message"
    """
    name: str = Field(..., min_length=1)
    email: EmailStr
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    category: ContactCategory = "general"
    read: bool = False

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class ShopSettings(BaseModel):
    """
    Shop settings schema
    Collection name: "shop_settings" (a single document)
    """
    is_active: bool = True
    maintenance_message: Optional[str] = "Shop is currently under maintenance. Please check back later."


class ShopSettingsUpdate(BaseModel):
    is_active: Optional[bool] = None
    maintenance_message: Optional[str] = None


class Video(BaseModel):
    """
    Videos collection schema
    Collection name: "video"
    """
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=1000)
    thumbnail: str = Field(..., description="Thumbnail path, image or short video")
    thumbnail_type: ThumbnailType = "image"
    video_file: Optional[str] = Field(None, description="Uploaded video path")
    video_url: Optional[str] = Field(None, description="External video URL")
    category: VideoCategory = "gameplay"
    duration: Optional[float] = Field(None, ge=0, description="Length in seconds")
    views: int = Field(0, ge=0)
    is_public: bool = True
    featured: bool = False
    tags: List[str] = Field(default_factory=list)
    uploaded_by: str

    @model_validator(mode="after")
    def require_source(self):
        if not self.video_file and not self.video_url:
            raise ValueError("Either video file or video URL must be provided")
        return self


class VideoUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    thumbnail: Optional[str] = None
    thumbnail_type: Optional[ThumbnailType] = None
    video_file: Optional[str] = None
    video_url: Optional[str] = None
    category: Optional[VideoCategory] = None
    duration: Optional[float] = Field(None, ge=0)
    is_public: Optional[bool] = None
    featured: Optional[bool] = None
    tags: Optional[List[str]] = None
    uploaded_by: Optional[str] = None


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
