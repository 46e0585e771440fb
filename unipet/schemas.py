"""Request payload schemas for the content API.

Payloads use camelCase keys; validated values are dumped with the model's
snake_case attribute names so they can be applied straight onto the ORM rows.
"""
import re
from typing import ClassVar, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from unipet.errors import ValidationError
from unipet.services.text import sanitize_text

EMAIL_PATTERN = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'
URL_PATTERN = r'^https?://\S+$'


class Payload(BaseModel):
    """Base for request bodies: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra='ignore',
    )

    # Attribute names whose text is sanitised before validation
    SANITIZED: ClassVar[Tuple[str, ...]] = ()
    NULLABLE: ClassVar[Tuple[str, ...]] = ()

    @field_validator('*', mode='before')
    @classmethod
    def sanitize_fields(cls, value, info):
        if info.field_name in cls.SANITIZED and isinstance(value, str):
            return sanitize_text(value)
        return value


def _require_items(values, message):
    cleaned = [sanitize_text(v) for v in values if isinstance(v, str)]
    cleaned = [v for v in cleaned if v]
    if not cleaned:
        raise ValueError(message)
    return cleaned


# ── Plans ────────────────────────────────────────────────────

class PlanCreate(Payload):
    SANITIZED: ClassVar[Tuple[str, ...]] = ('name', 'description', 'button_text')

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=1000)
    features: List[str] = Field(..., min_length=1, max_length=50)
    price_normal: int = Field(..., ge=0)
    price_with_copay: int = Field(..., ge=0)
    image: Optional[str] = None
    button_text: str = Field('Contratar Plano', min_length=1, max_length=100)
    redirect_url: str = Field('/contact', min_length=1, max_length=500)
    is_popular: bool = False
    is_active: bool = True
    display_order: int = Field(0, ge=0)

    @field_validator('features')
    @classmethod
    def check_features(cls, value):
        return _require_items(value, 'Plano deve ter pelo menos 1 recurso')


class PlanUpdate(Payload):
    SANITIZED: ClassVar[Tuple[str, ...]] = PlanCreate.SANITIZED
    NULLABLE: ClassVar[Tuple[str, ...]] = ('image',)

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    features: Optional[List[str]] = Field(None, min_length=1, max_length=50)
    price_normal: Optional[int] = Field(None, ge=0)
    price_with_copay: Optional[int] = Field(None, ge=0)
    image: Optional[str] = None
    button_text: Optional[str] = Field(None, min_length=1, max_length=100)
    redirect_url: Optional[str] = Field(None, min_length=1, max_length=500)
    is_popular: Optional[bool] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = Field(None, ge=0)

    @field_validator('features')
    @classmethod
    def check_features(cls, value):
        if value is None:
            return value
        return _require_items(value, 'Plano deve ter pelo menos 1 recurso')


# ── Network units ────────────────────────────────────────────

class NetworkUnitCreate(Payload):
    SANITIZED: ClassVar[Tuple[str, ...]] = ('name', 'address')

    name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=8, max_length=30)
    whatsapp: Optional[str] = Field(None, pattern=r'^\d{11}$')
    google_maps_url: Optional[str] = Field(None, pattern=URL_PATTERN, max_length=500)
    rating: int = Field(..., ge=0, le=50)
    services: List[str] = Field(..., min_length=1, max_length=50)
    image_url: str = Field(..., min_length=1)
    is_active: bool = True

    @field_validator('whatsapp', 'google_maps_url', mode='before')
    @classmethod
    def blank_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator('services')
    @classmethod
    def check_services(cls, value):
        return _require_items(value, 'Unidade deve oferecer pelo menos 1 serviço')


class NetworkUnitUpdate(NetworkUnitCreate):
    NULLABLE: ClassVar[Tuple[str, ...]] = ('whatsapp', 'google_maps_url')

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, min_length=8, max_length=30)
    rating: Optional[int] = Field(None, ge=0, le=50)
    services: Optional[List[str]] = Field(None, min_length=1, max_length=50)
    image_url: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = None

    @field_validator('services')
    @classmethod
    def check_services(cls, value):
        if value is None:
            return value
        return _require_items(value, 'Unidade deve oferecer pelo menos 1 serviço')


# ── FAQ ──────────────────────────────────────────────────────

class FaqItemCreate(Payload):
    SANITIZED: ClassVar[Tuple[str, ...]] = ('question', 'answer')

    question: str = Field(..., min_length=1, max_length=500)
    answer: str = Field(..., min_length=1, max_length=5000)
    display_order: int = Field(0, ge=0)
    is_active: bool = True


class FaqItemUpdate(FaqItemCreate):
    question: Optional[str] = Field(None, min_length=1, max_length=500)
    answer: Optional[str] = Field(None, min_length=1, max_length=5000)
    display_order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


# ── Contact form ─────────────────────────────────────────────

class ContactSubmissionCreate(Payload):
    SANITIZED: ClassVar[Tuple[str, ...]] = ('name', 'city', 'pet_name', 'animal_type', 'pet_age', 'plan_interest', 'message')

    name: str = Field(..., min_length=2, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    phone: str = Field(..., min_length=10, max_length=20)
    city: str = Field(..., min_length=1, max_length=100)
    pet_name: str = Field(..., min_length=1, max_length=100)
    animal_type: str = Field(..., min_length=1, max_length=50)
    pet_age: str = Field(..., min_length=1, max_length=50)
    plan_interest: str = Field(..., min_length=1, max_length=100)
    message: Optional[str] = Field(None, max_length=1000)


# ── Site settings ────────────────────────────────────────────

class SiteSettingsUpdate(Payload):
    SANITIZED: ClassVar[Tuple[str, ...]] = ('address', 'business_hours', 'our_story', 'privacy_policy', 'terms_of_use')
    NULLABLE: ClassVar[Tuple[str, ...]] = ('*',)

    whatsapp: Optional[str] = Field(None, max_length=30)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = Field(None, max_length=255)
    cnpj: Optional[str] = Field(None, max_length=20)
    instagram_url: Optional[str] = Field(None, max_length=500)
    facebook_url: Optional[str] = Field(None, max_length=500)
    linkedin_url: Optional[str] = Field(None, max_length=500)
    youtube_url: Optional[str] = Field(None, max_length=500)
    business_hours: Optional[str] = None
    our_story: Optional[str] = None
    privacy_policy: Optional[str] = None
    terms_of_use: Optional[str] = None
    main_image: Optional[str] = None
    network_image: Optional[str] = None
    about_image: Optional[str] = None

    @field_validator('email')
    @classmethod
    def check_email(cls, value):
        if value and not _matches(EMAIL_PATTERN, value):
            raise ValueError('Email deve ser válido')
        return value

    @field_validator('instagram_url', 'facebook_url', 'linkedin_url', 'youtube_url')
    @classmethod
    def check_social_url(cls, value):
        if value and not _matches(URL_PATTERN, value):
            raise ValueError('URL deve ser válida')
        return value


def _matches(pattern, value):
    return re.match(pattern, value) is not None


# ── Helpers ──────────────────────────────────────────────────

def _format_errors(exc):
    details = []
    for err in exc.errors():
        location = '.'.join(str(part) for part in err.get('loc', ()))
        details.append({'field': location, 'message': err.get('msg', '')})
    return details


def parse_payload(schema, data, message='Dados inválidos'):
    """Validate data against schema, raising the API ValidationError."""
    try:
        return schema.model_validate(data or {})
    except PydanticValidationError as exc:
        raise ValidationError(message, details=_format_errors(exc)) from exc


def create_values(schema, data, message='Dados inválidos'):
    """Validated values for a new row, keyed by attribute name."""
    return parse_payload(schema, data, message).model_dump()


def update_values(schema, data, message='Dados inválidos'):
    """Validated values for a partial update.

    Only keys present in the body are returned. An explicit null is a
    ValidationError unless the column accepts it.
    """
    payload = parse_payload(schema, data, message)
    nullable = getattr(schema, 'NULLABLE', ())
    values = payload.model_dump(exclude_unset=True)
    if '*' not in nullable:
        nulls = [attr for attr, value in values.items() if value is None and attr not in nullable]
        if nulls:
            details = [{'field': schema.model_fields[attr].alias or attr,
                        'message': 'Campo não pode ser nulo'} for attr in nulls]
            raise ValidationError(message, details=details)
    return values
