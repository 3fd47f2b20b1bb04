"""
Seed Script: Portfolio content
Creates the admin account, the profile, sample projects, enhanced projects
and the default UI effects. Every step skips records that already exist.

Usage:
    python migrations/seed_database.py [--reset]
    flask seed-db [--reset]
"""

import os
import sys
import secrets
import argparse

from flask import current_app

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from extensions import db
from models import User, Project, EnhancedProject, Profile, UIEffect
from schemas import (
    ProfileRequest, ProjectRequest, EnhancedProjectRequest, EFFECT_SETTINGS_SCHEMAS
)
from utils.security import hash_password


PROFILE = {
    'fullName': 'Soulaimane Ben Louaret',
    'title': 'Full-Stack Developer & Software Engineer',
    'bio': ('Passionate full-stack developer with expertise in modern web technologies. '
            'I enjoy building scalable, user-friendly applications and solving real-world '
            'problems with React, Node.js, Python and TypeScript.'),
    'shortBio': 'Full-stack developer creating innovative web solutions with modern technologies.',
    'email': 'soulaimane.benlouaret@gmail.com',
    'location': 'Algeria',
    'skills': [
        {'name': 'React', 'category': 'frontend', 'level': 'advanced', 'yearsOfExperience': 3},
        {'name': 'TypeScript', 'category': 'frontend', 'level': 'advanced', 'yearsOfExperience': 2},
        {'name': 'JavaScript', 'category': 'frontend', 'level': 'expert', 'yearsOfExperience': 4},
        {'name': 'Tailwind CSS', 'category': 'frontend', 'level': 'advanced', 'yearsOfExperience': 2},
        {'name': 'Node.js', 'category': 'backend', 'level': 'advanced', 'yearsOfExperience': 3},
        {'name': 'Python', 'category': 'backend', 'level': 'intermediate', 'yearsOfExperience': 2},
        {'name': 'PostgreSQL', 'category': 'database', 'level': 'intermediate', 'yearsOfExperience': 1},
        {'name': 'MongoDB', 'category': 'database', 'level': 'advanced', 'yearsOfExperience': 2},
        {'name': 'Git', 'category': 'devops', 'level': 'advanced', 'yearsOfExperience': 4},
        {'name': 'Docker', 'category': 'devops', 'level': 'intermediate', 'yearsOfExperience': 1},
        {'name': 'Figma', 'category': 'design', 'level': 'intermediate', 'yearsOfExperience': 2},
    ],
    'socialLinks': [
        {'platform': 'GitHub', 'url': 'https://github.com/soulaimane', 'icon': 'github'},
        {'platform': 'LinkedIn', 'url': 'https://linkedin.com/in/soulaimane-ben-louaret', 'icon': 'linkedin'},
        {'platform': 'Email', 'url': 'mailto:soulaimane.benlouaret@gmail.com', 'icon': 'mail'},
    ],
    'experience': [
        {
            'title': 'Full-Stack Developer',
            'company': 'Tech Solutions Co.',
            'location': 'Algeria (Remote)',
            'startDate': '2022-01-01',
            'description': ('Developing and maintaining web applications with React, Node.js '
                            'and MongoDB. Leading front-end development initiatives.'),
            'technologies': ['React', 'Node.js', 'MongoDB', 'TypeScript'],
            'isCurrentJob': True,
        },
        {
            'title': 'Frontend Developer',
            'company': 'Digital Agency',
            'location': 'Algeria',
            'startDate': '2021-06-01',
            'endDate': '2021-12-31',
            'description': 'Built responsive, interactive user interfaces for client projects.',
            'technologies': ['JavaScript', 'React', 'CSS3'],
        },
    ],
    'education': [
        {
            'degree': "Master's in Computer Science",
            'institution': 'University of Science and Technology',
            'location': 'Algeria',
            'startDate': '2020-09-01',
            'endDate': '2022-06-30',
            'gpa': '16.5/20',
            'description': 'Specialized in software engineering and web development.',
        },
        {
            'degree': "Bachelor's in Computer Science",
            'institution': 'University of Technology',
            'location': 'Algeria',
            'startDate': '2017-09-01',
            'endDate': '2020-06-30',
        },
    ],
    'languages': [
        {'name': 'Arabic', 'proficiency': 'native'},
        {'name': 'French', 'proficiency': 'fluent'},
        {'name': 'English', 'proficiency': 'fluent'},
    ],
    'certifications': [
        {
            'name': 'Full Stack Web Development',
            'issuer': 'FreeCodeCamp',
            'issueDate': '2021-03-15',
            'credentialUrl': 'https://freecodecamp.org/certification/soulaimane/full-stack',
        },
    ],
    'availability': {
        'isAvailable': True,
        'status': 'available',
        'message': 'Available for new opportunities and freelance projects',
    },
    'stats': {
        'projectsCompleted': 25,
        'yearsOfExperience': 4,
        'clientsSatisfied': 15,
        'linesOfCode': 50000,
    },
}

PROJECTS = [
    {
        'name': 'E-Commerce Platform',
        'description': ('A full-featured e-commerce platform with user authentication, '
                        'product management, and payment integration.'),
        'technologies': ['React', 'Node.js', 'MongoDB', 'Stripe', 'JWT'],
        'features': ['User authentication', 'Product catalog with search', 'Stripe checkout'],
        'githubUrl': 'https://github.com/soulaimane/ecommerce-platform',
        'demoUrl': 'https://ecommerce-demo.soulaimane.dev',
        'category': 'web',
        'status': 'completed',
        'priority': 9,
        'startDate': '2023-01-01',
        'endDate': '2023-03-15',
    },
    {
        'name': 'Task Management App',
        'description': 'A collaborative task manager with real-time updates and team features.',
        'technologies': ['React', 'TypeScript', 'Socket.io', 'MongoDB'],
        'features': ['Real-time collaboration', 'Drag and drop boards'],
        'githubUrl': 'https://github.com/soulaimane/task-manager',
        'category': 'web',
        'status': 'completed',
        'priority': 8,
        'startDate': '2022-10-01',
        'endDate': '2022-12-20',
    },
    {
        'name': 'Weather Dashboard',
        'description': 'A weather application with location-based forecasts and interactive maps.',
        'technologies': ['React', 'TypeScript', 'OpenWeather API', 'Chart.js'],
        'category': 'web',
        'status': 'completed',
        'priority': 7,
    },
    {
        'name': 'Blog Platform',
        'description': 'A blogging platform with markdown support and user management.',
        'technologies': ['Next.js', 'TypeScript', 'PostgreSQL'],
        'category': 'web',
        'status': 'in-progress',
        'priority': 6,
        'startDate': '2023-11-01',
    },
]

ENHANCED_PROJECTS = [
    {
        'name': 'Assembly Pixel Renderer',
        'description': ('High-performance pixel manipulation and rendering engine built with '
                        'x86 Assembly for maximum speed.'),
        'technologies': ['Assembly', 'x86', 'SIMD', 'C Integration'],
        'features': ['SIMD-optimized operations', 'Real-time rendering'],
        'githubUrl': 'https://github.com/soulaimane/assembly-pixel-renderer',
        'category': 'desktop',
        'status': 'completed',
        'priority': 9,
        'isFeatured': True,
        'cardSettings': {
            'spotlightCard': {
                'spotlightColor': 'rgba(139, 92, 246, 0.4)',
                'borderColor': 'rgba(139, 92, 246, 0.3)',
            },
            'profileCard': {'customColors': ['#8B5CF6', '#A855F7', '#C084FC']},
            'display': {
                'accentColor': '#8B5CF6',
                'tags': ['Assembly', 'Graphics', 'Performance'],
                'displayOrder': 1,
            },
        },
        'effectSettings': {
            'dither': {'waveColor': [0.54, 0.36, 0.96], 'colorNum': 8,
                       'waveAmplitude': 0.3, 'waveFrequency': 3.0},
        },
    },
    {
        'name': 'Task Scheduling Simulation',
        'description': ('Operating system simulation of CPU scheduling algorithms with '
                        'real-time visualization.'),
        'technologies': ['C++', 'Qt', 'Algorithms'],
        'githubUrl': 'https://github.com/soulaimane/task-scheduling-sim',
        'category': 'desktop',
        'status': 'completed',
        'priority': 8,
        'isFeatured': True,
        'cardSettings': {
            'spotlightCard': {'spotlightColor': 'rgba(6, 182, 212, 0.4)'},
            'profileCard': {'customColors': ['#06B6D4', '#0891B2', '#0E7490']},
            'display': {
                'accentColor': '#06B6D4',
                'tags': ['C++', 'Algorithms', 'Simulation'],
                'displayOrder': 2,
            },
        },
        'effectSettings': {
            'dither': {'waveColor': [0.02, 0.71, 0.83], 'waveFrequency': 2.8},
        },
    },
    {
        'name': 'Hotel Management System',
        'description': 'Full-stack hotel management solution with a comprehensive booking system.',
        'technologies': ['React', 'Node.js', 'MongoDB', 'Express'],
        'category': 'web',
        'status': 'in-progress',
        'priority': 7,
        'cardSettings': {
            'display': {'accentColor': '#10B981', 'tags': ['Full-Stack'], 'displayOrder': 3},
        },
    },
]


def _ui_effects():
    config = current_app.config
    return [
        {
            'name': 'Dither Effect',
            'type': 'dither',
            'global_settings': {'coverage': 'section', 'zIndex': 1000},
            'component_settings': {'waveColor': [0.54, 0.36, 0.96]},
        },
        {
            'name': 'Spotlight Card Effect',
            'type': 'spotlight',
            'component_settings': {},
        },
        {
            'name': 'Profile Card Effect',
            'type': 'profile-card',
            'component_settings': {'customColors': ['#8B5CF6', '#06B6D4', '#10B981', '#F59E0B']},
        },
        {
            'name': 'Staggered Menu Effect',
            'type': 'staggered-menu',
            'component_settings': {'socialLinks': [
                {'name': 'GitHub', 'url': config['SOCIAL_GITHUB_URL'], 'icon': 'github',
                 'color': '#8B5CF6', 'order': 1},
                {'name': 'LinkedIn', 'url': config['SOCIAL_LINKEDIN_URL'], 'icon': 'linkedin',
                 'color': '#06B6D4', 'order': 2},
                {'name': 'Twitter', 'url': config['SOCIAL_TWITTER_URL'], 'icon': 'twitter',
                 'color': '#10B981', 'order': 3},
            ]},
        },
        {
            'name': 'Electric Border Effect',
            'type': 'electric-border',
            'component_settings': {
                'enabled': True,
                'borderWidth': '2px',
                'borderColor': '#8B5CF6',
                'animationSpeed': 1.5,
                'glowIntensity': 0.6,
                'borderRadius': '1rem',
            },
        },
    ]


def seed_admin():
    """Create the default admin; returns a generated password when none was configured"""
    config = current_app.config
    username = config['DEFAULT_ADMIN_USERNAME']
    if User.query.filter_by(username=username).first():
        print(f"  Admin {username} already exists, skipping...")
        return 0, None

    password = config.get('DEFAULT_ADMIN_PASSWORD')
    generated = None
    if not password:
        generated = password = secrets.token_urlsafe(12)

    db.session.add(User(
        username=username,
        email=config['DEFAULT_ADMIN_EMAIL'].lower(),
        password_hash=hash_password(password),
        role='admin'
    ))
    db.session.commit()
    print(f"  [OK] Admin user created: {username}")
    return 1, generated


def seed_profile():
    if Profile.query.first():
        print("  Profile already exists, skipping...")
        return 0

    payload = ProfileRequest.model_validate(PROFILE)
    db.session.add(Profile(**payload.to_model_values()))
    db.session.commit()
    print(f"  [OK] Profile created: {payload.full_name}")
    return 1


def seed_projects():
    created = 0
    for data in PROJECTS:
        if Project.query.filter_by(name=data['name']).first():
            continue
        db.session.add(Project(**ProjectRequest.model_validate(data).model_dump()))
        created += 1
    db.session.commit()
    print(f"  [OK] Created {created} projects")
    return created


def seed_enhanced_projects():
    created = 0
    for data in ENHANCED_PROJECTS:
        if EnhancedProject.query.filter_by(name=data['name']).first():
            continue
        payload = EnhancedProjectRequest.model_validate(data)
        db.session.add(EnhancedProject(**payload.to_model_values()))
        created += 1
    db.session.commit()
    print(f"  [OK] Created {created} enhanced projects")
    return created


def seed_ui_effects():
    created = 0
    for data in _ui_effects():
        if UIEffect.query.filter_by(name=data['name']).first():
            continue
        schema = EFFECT_SETTINGS_SCHEMAS.get(data['type'])
        settings = data['component_settings']
        if schema is not None:
            settings = schema.model_validate(settings).to_document()
        db.session.add(UIEffect(
            name=data['name'],
            type=data['type'],
            is_active=True,
            global_settings=data.get('global_settings', {}),
            component_settings=settings
        ))
        created += 1
    db.session.commit()
    print(f"  [OK] Created {created} UI effects")
    return created


def clear_content():
    """Delete seeded content; users and contact messages are kept"""
    for model in (EnhancedProject, Project, Profile, UIEffect):
        model.query.delete()
    db.session.commit()
    print("  [OK] Content tables cleared")


def seed_database(reset=False):
    """Run every seed step inside the current app context and return created counts"""
    db.create_all()
    if reset:
        clear_content()

    admins, generated_password = seed_admin()
    if generated_password:
        print(f"  Generated admin password: {generated_password}")
        print("  Set DEFAULT_ADMIN_PASSWORD to choose your own.")

    summary = {
        'admins': admins,
        'profiles': seed_profile(),
        'projects': seed_projects(),
        'enhanced_projects': seed_enhanced_projects(),
        'ui_effects': seed_ui_effects(),
    }
    current_app.logger.info(f"Database seeded: {summary}")
    return summary


def main():
    """Main seeding function"""
    parser = argparse.ArgumentParser(description='Seed the portfolio database.')
    parser.add_argument('--reset', action='store_true', help='Clear content tables before seeding.')
    args = parser.parse_args()

    print("=" * 60)
    print("Portfolio Database Seed Script")
    print("=" * 60)

    from app import create_app
    app = create_app()
    with app.app_context():
        summary = seed_database(reset=args.reset)

    print("\n" + "=" * 60)
    print("Seeding completed successfully!")
    print("=" * 60)
    for name, count in summary.items():
        print(f"  {name}: {count}")


if __name__ == '__main__':
    main()
