from extensions import db
from datetime import datetime
from flask_login import UserMixin
from sqlalchemy import JSON
import uuid


# Custom JSON type that uses JSONB on PostgreSQL and JSON/Text on SQLite
class SafeJSON(db.TypeDecorator):
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


def _iso(value):
    return value.isoformat() if value else None


class TimestampMixin:
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def _timestamps(self):
        return {'createdAt': _iso(self.created_at), 'updatedAt': _iso(self.updated_at)}


class User(UserMixin, TimestampMixin, db.Model):
    __tablename__ = 'users'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = db.Column(db.String(30), unique=True, nullable=False)
    email = db.Column(db.String(254), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), default='user', nullable=False)  # admin, user
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    last_login = db.Column(db.DateTime)

    @property
    def is_admin(self):
        return self.role == 'admin'

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'role': self.role,
        }


class ProjectFieldsMixin(TimestampMixin):
    """Columns shared by plain and enhanced projects."""

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(500), nullable=False)
    long_description = db.Column(db.Text)
    technologies = db.Column(SafeJSON, default=list, nullable=False)
    features = db.Column(SafeJSON, default=list, nullable=False)
    github_url = db.Column(db.String(500))
    demo_url = db.Column(db.String(500))
    image_url = db.Column(db.String(500))
    category = db.Column(db.String(20), default='web', nullable=False)  # web, mobile, desktop, game, ai, other
    status = db.Column(db.String(20), default='completed', nullable=False)  # completed, in-progress, planned
    priority = db.Column(db.Integer, default=0, nullable=False)
    start_date = db.Column(db.Date)
    end_date = db.Column(db.Date)
    is_public = db.Column(db.Boolean, default=True, nullable=False)

    def _project_fields(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'longDescription': self.long_description,
            'technologies': self.technologies or [],
            'features': self.features or [],
            'githubUrl': self.github_url,
            'demoUrl': self.demo_url,
            'imageUrl': self.image_url,
            'category': self.category,
            'status': self.status,
            'priority': self.priority,
            'startDate': _iso(self.start_date),
            'endDate': _iso(self.end_date),
            'isPublic': self.is_public,
        }


class Project(ProjectFieldsMixin, db.Model):
    __tablename__ = 'projects'

    __table_args__ = (
        db.Index('idx_project_category_status_priority', 'category', 'status', 'priority'),
        db.Index('idx_project_public_created', 'is_public', 'created_at'),
    )

    def to_dict(self):
        data = self._project_fields()
        data.update(self._timestamps())
        return data


class EnhancedProject(ProjectFieldsMixin, db.Model):
    __tablename__ = 'enhanced_projects'
    preview_image = db.Column(db.String(500))
    is_featured = db.Column(db.Boolean, default=False, nullable=False)
    card_settings = db.Column(SafeJSON, default=dict, nullable=False)  # {spotlightCard, profileCard, display}
    effect_settings = db.Column(SafeJSON, default=dict, nullable=False)  # {dither}

    __table_args__ = (
        db.Index('idx_enhanced_category_status_priority', 'category', 'status', 'priority'),
        db.Index('idx_enhanced_featured_priority', 'is_featured', 'priority'),
        db.Index('idx_enhanced_public_created', 'is_public', 'created_at'),
    )

    def to_dict(self):
        data = self._project_fields()
        data.update({
            'previewImage': self.preview_image,
            'isFeatured': self.is_featured,
            'cardSettings': self.card_settings or {},
            'effectSettings': self.effect_settings or {},
        })
        data.update(self._timestamps())
        return data


class Contact(TimestampMixin, db.Model):
    __tablename__ = 'contacts'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(254), nullable=False, index=True)
    subject = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    is_read = db.Column(db.Boolean, default=False, nullable=False)
    is_replied = db.Column(db.Boolean, default=False, nullable=False)
    priority = db.Column(db.String(10), default='medium', nullable=False)  # low, medium, high
    ip_address = db.Column(db.String(45))
    user_agent = db.Column(db.String(255))

    __table_args__ = (
        db.Index('idx_contact_read_created', 'is_read', 'created_at'),
    )

    def to_dict(self):
        data = {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'subject': self.subject,
            'message': self.message,
            'isRead': self.is_read,
            'isReplied': self.is_replied,
            'priority': self.priority,
            'ipAddress': self.ip_address,
            'userAgent': self.user_agent,
        }
        data.update(self._timestamps())
        return data


class Profile(TimestampMixin, db.Model):
    """Single-row table holding the portfolio owner's profile."""

    __tablename__ = 'profiles'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    full_name = db.Column(db.String(100), nullable=False)
    title = db.Column(db.String(100), nullable=False)
    bio = db.Column(db.Text, nullable=False)
    short_bio = db.Column(db.String(300), nullable=False)
    email = db.Column(db.String(254), nullable=False)
    phone = db.Column(db.String(50))
    location = db.Column(db.String(100), nullable=False)
    profile_image = db.Column(db.String(500))
    resume_url = db.Column(db.String(500))
    skills = db.Column(SafeJSON, default=list)  # [{name, category, level, yearsOfExperience}]
    social_links = db.Column(SafeJSON, default=list)  # [{platform, url, icon}]
    experience = db.Column(SafeJSON, default=list)
    education = db.Column(SafeJSON, default=list)
    languages = db.Column(SafeJSON, default=list)
    certifications = db.Column(SafeJSON, default=list)
    availability = db.Column(SafeJSON, default=dict)  # {isAvailable, status, message}
    stats = db.Column(SafeJSON, default=dict)  # {projectsCompleted, yearsOfExperience, ...}

    def to_dict(self):
        data = {
            'id': self.id,
            'fullName': self.full_name,
            'title': self.title,
            'bio': self.bio,
            'shortBio': self.short_bio,
            'email': self.email,
            'phone': self.phone,
            'location': self.location,
            'profileImage': self.profile_image,
            'resumeUrl': self.resume_url,
            'skills': self.skills or [],
            'socialLinks': self.social_links or [],
            'experience': self.experience or [],
            'education': self.education or [],
            'languages': self.languages or [],
            'certifications': self.certifications or [],
            'availability': self.availability or {},
            'stats': self.stats or {},
        }
        data.update(self._timestamps())
        return data


class UIEffect(TimestampMixin, db.Model):
    __tablename__ = 'ui_effects'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(50), unique=True, nullable=False)
    type = db.Column(db.String(30), nullable=False)  # dither, spotlight, profile-card, staggered-menu, ...
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    global_settings = db.Column(SafeJSON, default=dict)
    component_settings = db.Column(SafeJSON, default=dict)

    __table_args__ = (
        db.Index('idx_ui_effect_type_active', 'type', 'is_active'),
    )

    @property
    def settings(self):
        """Component settings take precedence over the global ones."""
        return self.component_settings or self.global_settings or {}

    def to_dict(self):
        data = {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'isActive': self.is_active,
            'globalSettings': self.global_settings or {},
            'componentSettings': self.component_settings or {},
        }
        data.update(self._timestamps())
        return data
