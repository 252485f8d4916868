from .admin import register_admin_commands


def register_cli(app):
    register_admin_commands(app)
