"""
Blueprints Package - Modular API structure
Each blueprint handles one resource under /api
"""

__all__ = ['api', 'auth', 'projects', 'enhanced_projects', 'contact', 'profile', 'ui_effects']
