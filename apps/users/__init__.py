"""Users app package.

The user directory: identity (name, email) of everyone who owns or rents
items. Use ``apps.users.models.CustomUser`` as the AUTH_USER_MODEL
throughout the project.
"""
