"""
Request schemas for the portfolio API.

Payloads arrive as camelCase JSON and are validated here before they touch
the models. Effect-setting schemas double as the source of default values.

Dependencies: pydantic
"""

import re
from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


URL_PATTERN = r'^https?://.+'
GITHUB_URL_PATTERN = r'^https?://(www\.)?github\.com/.*'
HEX_COLOR_PATTERN = r'^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$'
EMAIL_PATTERN = r'^[^@\s]+@[^@\s]+\.[^@\s]{2,}$'
PERSON_NAME_PATTERN = r"^[a-zA-Z\s'.-]+$"
USERNAME_PATTERN = r'^[a-zA-Z0-9_-]+$'

ProjectCategory = Literal['web', 'mobile', 'desktop', 'game', 'ai', 'other']
ProjectStatus = Literal['completed', 'in-progress', 'planned']
ContactPriority = Literal['low', 'medium', 'high']
EffectType = Literal['dither', 'spotlight', 'profile-card', 'staggered-menu',
                     'electric-border', 'logo-loop', 'shape-blur']

PROJECT_CATEGORIES = ProjectCategory.__args__
PROJECT_STATUSES = ProjectStatus.__args__
EFFECT_TYPES = EffectType.__args__


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, trimmed strings, unknown keys dropped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra='ignore',
    )

    def to_fields(self, **kwargs):
        """Snake-case dict of the fields the client actually sent."""
        return self.model_dump(exclude_unset=True, **kwargs)

    def to_document(self, **kwargs):
        """camelCase, JSON-ready dict for storage in JSON columns."""
        return self.model_dump(mode='json', by_alias=True, **kwargs)


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1, description="Username or email")
    password: str = Field(..., min_length=1)


class RegisterRequest(CamelModel):
    username: str = Field(..., min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    email: str = Field(..., max_length=254, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6)
    role: Literal['admin', 'user'] = 'user'

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value):
        return value.lower()

    @field_validator('password')
    @classmethod
    def password_strength(cls, value):
        if not (any(c.islower() for c in value)
                and any(c.isupper() for c in value)
                and any(c.isdigit() for c in value)):
            raise ValueError('Password must contain at least one lowercase letter, '
                             'one uppercase letter, and one number')
        return value


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

class ProjectRequest(CamelModel):
    """Full project payload, used for both create and update."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=10, max_length=500)
    long_description: Optional[str] = Field(None, max_length=2000)
    technologies: List[str] = Field(..., min_length=1)
    features: List[str] = Field(default_factory=list)
    github_url: Optional[str] = Field(None, pattern=GITHUB_URL_PATTERN)
    demo_url: Optional[str] = Field(None, pattern=URL_PATTERN)
    image_url: Optional[str] = Field(None, pattern=URL_PATTERN)
    category: ProjectCategory = 'web'
    status: ProjectStatus = 'completed'
    priority: int = Field(0, ge=0, le=10)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_public: bool = True

    @field_validator('technologies')
    @classmethod
    def check_technologies(cls, value):
        cleaned = [item.strip() for item in value]
        if any(not item or len(item) > 50 for item in cleaned):
            raise ValueError('Each technology must be between 1 and 50 characters')
        return cleaned

    @field_validator('features')
    @classmethod
    def check_features(cls, value):
        cleaned = [item.strip() for item in value if item and item.strip()]
        if any(len(item) > 200 for item in cleaned):
            raise ValueError('Each feature cannot exceed 200 characters')
        return cleaned

    @model_validator(mode='after')
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError('End date cannot be before start date')
        return self


class SpotlightCardSettings(CamelModel):
    spotlight_color: str = 'rgba(139, 92, 246, 0.3)'
    border_radius: str = '1.5rem'
    background_color: str = 'rgba(15, 15, 15, 0.95)'
    border_color: str = 'rgba(75, 85, 99, 0.3)'
    enable_spotlight: bool = True


BEHIND_GRADIENT = (
    'radial-gradient(farthest-side circle at var(--pointer-x) var(--pointer-y), '
    'hsla(262, 100%, 88%, var(--card-opacity)) 4%, '
    'hsla(262, 50%, 78%, calc(var(--card-opacity)*0.75)) 10%, '
    'hsla(262, 25%, 68%, calc(var(--card-opacity)*0.5)) 50%, '
    'hsla(262, 0%, 58%, 0) 100%), '
    'conic-gradient(from 124deg at 50% 50%, #8B5CF6 0%, #06B6D4 40%, #06B6D4 60%, #8B5CF6 100%)'
)
INNER_GRADIENT = 'linear-gradient(145deg, rgba(30, 27, 75, 0.9) 0%, rgba(67, 56, 202, 0.3) 100%)'


class ProfileCardDisplay(CamelModel):
    enable_tilt: bool = True
    behind_gradient: str = BEHIND_GRADIENT
    inner_gradient: str = INNER_GRADIENT
    show_behind_gradient: bool = True
    avatar_url: Optional[str] = None
    icon_url: Optional[str] = None
    custom_colors: List[str] = Field(default_factory=list)


class CardDisplaySettings(CamelModel):
    accent_color: str = Field('#8B5CF6', pattern=HEX_COLOR_PATTERN)
    text_color: str = '#F8FAFC'
    tags: List[str] = Field(default_factory=list)
    display_order: int = Field(0, ge=0)


class CardSettings(CamelModel):
    spotlight_card: SpotlightCardSettings = Field(default_factory=SpotlightCardSettings)
    profile_card: ProfileCardDisplay = Field(default_factory=ProfileCardDisplay)
    display: CardDisplaySettings = Field(default_factory=CardDisplaySettings)


WaveColor = List[float]


class DitherWave(CamelModel):
    wave_color: WaveColor = Field(default_factory=lambda: [0.54, 0.36, 0.96],
                                  min_length=3, max_length=3)
    color_num: int = Field(6, ge=2, le=32)
    wave_amplitude: float = Field(0.25, ge=0, le=2)
    wave_frequency: float = Field(2.5, ge=0.1, le=10)

    @field_validator('wave_color')
    @classmethod
    def check_wave_color(cls, value):
        if any(component < 0 or component > 1 for component in value):
            raise ValueError('Wave color values must be between 0 and 1')
        return value


class EffectSettings(CamelModel):
    dither: DitherWave = Field(default_factory=DitherWave)


class EnhancedProjectRequest(ProjectRequest):
    preview_image: Optional[str] = Field(None, pattern=URL_PATTERN)
    is_featured: bool = False
    card_settings: Optional[CardSettings] = None
    effect_settings: Optional[EffectSettings] = None

    def to_model_values(self):
        """Column values for a new project, with settings defaults filled in."""
        values = self.model_dump(exclude={'card_settings', 'effect_settings'})
        values['card_settings'] = (self.card_settings or CardSettings()).to_document()
        values['effect_settings'] = (self.effect_settings or EffectSettings()).to_document()
        return values


class EnhancedProjectChanges(CamelModel):
    """Partial update used by bulk updates and clone overrides."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=500)
    long_description: Optional[str] = Field(None, max_length=2000)
    technologies: Optional[List[str]] = Field(None, min_length=1)
    features: Optional[List[str]] = None
    github_url: Optional[str] = Field(None, pattern=GITHUB_URL_PATTERN)
    demo_url: Optional[str] = Field(None, pattern=URL_PATTERN)
    image_url: Optional[str] = Field(None, pattern=URL_PATTERN)
    preview_image: Optional[str] = Field(None, pattern=URL_PATTERN)
    category: Optional[ProjectCategory] = None
    status: Optional[ProjectStatus] = None
    priority: Optional[int] = Field(None, ge=0, le=10)
    is_public: Optional[bool] = None
    is_featured: Optional[bool] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @field_validator('name', 'description', 'technologies', 'features', 'category',
                     'status', 'priority', 'is_public', 'is_featured')
    @classmethod
    def reject_null(cls, value):
        # Omit a field to leave it unchanged; these columns are NOT NULL
        if value is None:
            raise ValueError('Value cannot be null')
        return value


class CardSettingsPatch(CamelModel):
    card_settings: CardSettings


class EffectSettingsPatch(CamelModel):
    effect_settings: EffectSettings


class BulkUpdateRequest(CamelModel):
    project_ids: List[str] = Field(..., min_length=1)
    updates: EnhancedProjectChanges

    @model_validator(mode='after')
    def require_updates(self):
        if not self.updates.model_fields_set:
            raise ValueError('Updates object is required')
        return self


# ---------------------------------------------------------------------------
# Contact
# ---------------------------------------------------------------------------

class ContactRequest(CamelModel):
    name: str = Field(..., min_length=2, max_length=100, pattern=PERSON_NAME_PATTERN)
    email: str = Field(..., max_length=254, pattern=EMAIL_PATTERN)
    subject: str = Field(..., min_length=5, max_length=200)
    message: str = Field(..., min_length=10, max_length=2000)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value):
        return value.lower()


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

class SkillEntry(CamelModel):
    name: str = Field(..., min_length=1)
    category: Literal['frontend', 'backend', 'database', 'devops', 'mobile', 'design', 'other']
    level: Literal['beginner', 'intermediate', 'advanced', 'expert']
    years_of_experience: Optional[float] = Field(None, ge=0)


class SocialLinkEntry(CamelModel):
    platform: str = Field(..., min_length=1)
    url: str = Field(..., pattern=r'^(https?://|mailto:).+')
    icon: Optional[str] = None


class ExperienceEntry(CamelModel):
    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    location: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    description: str = Field(..., min_length=1)
    technologies: List[str] = Field(default_factory=list)
    is_current_job: bool = False


class EducationEntry(CamelModel):
    degree: str = Field(..., min_length=1)
    institution: str = Field(..., min_length=1)
    location: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    gpa: Optional[str] = None
    description: Optional[str] = None
    is_current_study: bool = False


class LanguageEntry(CamelModel):
    name: str = Field(..., min_length=1)
    proficiency: Literal['native', 'fluent', 'conversational', 'basic']


class CertificationEntry(CamelModel):
    name: str = Field(..., min_length=1)
    issuer: str = Field(..., min_length=1)
    issue_date: date
    expiry_date: Optional[date] = None
    credential_url: Optional[str] = Field(None, pattern=URL_PATTERN)


class Availability(CamelModel):
    is_available: bool = True
    status: Literal['available', 'busy', 'not-available'] = 'available'
    message: Optional[str] = None


class PortfolioStats(CamelModel):
    projects_completed: int = Field(0, ge=0)
    years_of_experience: int = Field(0, ge=0)
    clients_satisfied: int = Field(0, ge=0)
    lines_of_code: int = Field(0, ge=0)


# Profile columns stored as camelCase JSON documents
PROFILE_DOCUMENT_FIELDS = ('skills', 'social_links', 'experience', 'education',
                           'languages', 'certifications', 'availability', 'stats')


class ProfileRequest(CamelModel):
    full_name: str = Field(..., min_length=2, max_length=100, pattern=PERSON_NAME_PATTERN)
    title: str = Field(..., min_length=2, max_length=100)
    bio: str = Field(..., min_length=10, max_length=2000)
    short_bio: str = Field(..., min_length=10, max_length=300)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    phone: Optional[str] = None
    location: str = Field(..., min_length=2, max_length=100)
    profile_image: Optional[str] = Field(None, pattern=URL_PATTERN)
    resume_url: Optional[str] = Field(None, pattern=URL_PATTERN)
    skills: List[SkillEntry] = Field(default_factory=list)
    social_links: List[SocialLinkEntry] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    languages: List[LanguageEntry] = Field(default_factory=list)
    certifications: List[CertificationEntry] = Field(default_factory=list)
    availability: Availability = Field(default_factory=Availability)
    stats: PortfolioStats = Field(default_factory=PortfolioStats)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value):
        return value.lower()

    def to_model_values(self):
        """Column values; nested entries become camelCase JSON documents."""
        values = self.model_dump(exclude=set(PROFILE_DOCUMENT_FIELDS))
        for name in PROFILE_DOCUMENT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, list):
                values[name] = [item.to_document() for item in value]
            else:
                values[name] = value.to_document()
        return values


# ---------------------------------------------------------------------------
# UI effects
# ---------------------------------------------------------------------------

class UIEffectRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=50)
    type: EffectType
    is_active: bool = True
    global_settings: dict = Field(default_factory=dict)
    component_settings: dict = Field(default_factory=dict)


class ToggleRequest(CamelModel):
    is_active: Optional[bool] = None


class DitherSettings(CamelModel):
    wave_color: WaveColor = Field(default_factory=lambda: [0.54, 0.36, 0.96],
                                  min_length=3, max_length=3)
    color_num: int = Field(6, ge=2, le=32)
    wave_amplitude: float = Field(0.25, ge=0, le=2)
    wave_frequency: float = Field(2.5, ge=0.1, le=10)
    enable_mouse_interaction: bool = True
    animation_speed: float = Field(1.0, ge=0.1, le=5)
    intensity: float = Field(0.8, ge=0, le=1)
    coverage: Literal['full', 'section', 'element'] = 'section'
    z_index: int = 1000

    @field_validator('wave_color')
    @classmethod
    def check_wave_color(cls, value):
        if any(component < 0 or component > 1 for component in value):
            raise ValueError('Wave color must be an array of 3 values between 0 and 1')
        return value


class SpotlightSettings(CamelModel):
    enabled: bool = True
    spotlight_color: str = 'rgba(139, 92, 246, 0.3)'
    spotlight_size: int = Field(200, ge=50, le=500)
    border_radius: str = '1.5rem'
    background_color: str = 'rgba(15, 15, 15, 0.95)'
    border_color: str = 'rgba(75, 85, 99, 0.3)'
    transition: str = 'all 0.3s ease'
    hover_scale: float = Field(1.02, ge=1, le=1.2)
    glow_intensity: float = Field(0.5, ge=0, le=1)


class CardAnimations(CamelModel):
    hover: bool = True
    float_: bool = Field(False, alias='float')
    glow: bool = True


class ProfileCardSettings(CamelModel):
    enable_tilt: bool = True
    tilt_max_angle: float = Field(15, ge=0, le=45)
    tilt_reverse: bool = False
    behind_gradient: str = BEHIND_GRADIENT
    inner_gradient: str = INNER_GRADIENT
    show_behind_gradient: bool = True
    card_opacity: float = Field(0.8, ge=0, le=1)
    border_radius: str = '1.5rem'
    custom_colors: List[str] = Field(default_factory=lambda: ['#8B5CF6', '#06B6D4'])
    animations: CardAnimations = Field(default_factory=CardAnimations)

    @field_validator('custom_colors')
    @classmethod
    def check_custom_colors(cls, value):
        if any(not re.match(HEX_COLOR_PATTERN, color) for color in value):
            raise ValueError('Please enter a valid hex color')
        return value


class MenuTransform(CamelModel):
    initial: str = 'translateY(30px)'
    final: str = 'translateY(0px)'


class MenuSocialLink(CamelModel):
    name: str = Field(..., min_length=1)
    url: str = Field(..., pattern=URL_PATTERN)
    icon: str = Field(..., min_length=1)
    color: str = '#8B5CF6'
    order: int = 0


class StaggeredMenuSettings(CamelModel):
    enabled: bool = True
    direction: Literal['horizontal', 'vertical'] = 'horizontal'
    stagger_delay: float = Field(0.1, ge=0, le=1)
    animation_duration: float = Field(0.6, ge=0.1, le=3)
    ease: str = 'power2.out'
    initial_opacity: float = Field(0, ge=0, le=1)
    final_opacity: float = Field(1, ge=0, le=1)
    transform: MenuTransform = Field(default_factory=MenuTransform)
    social_links: List[MenuSocialLink] = Field(default_factory=list)


# Effect kinds with a dedicated settings endpoint: url slug -> schema
EFFECT_SETTINGS_SCHEMAS = {
    'dither': DitherSettings,
    'spotlight': SpotlightSettings,
    'profile-card': ProfileCardSettings,
    'staggered-menu': StaggeredMenuSettings,
}
