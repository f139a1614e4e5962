"""Authentication and profile forms."""

from wtforms import StringField, PasswordField
from wtforms.validators import DataRequired, Email, Length, Optional, Regexp

from . import ApiForm

USERNAME_PATTERN = r'^[A-Za-z0-9_.-]+$'


class LoginForm(ApiForm):
    """Login form."""
    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Please enter a valid email address')
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])


class RegistrationForm(ApiForm):
    """Registration form."""
    username = StringField('Username', validators=[
        DataRequired(message='Username is required'),
        Length(min=3, max=50, message='Username must be between 3 and 50 characters'),
        Regexp(USERNAME_PATTERN, message='Username may only contain letters, numbers, dots, dashes and underscores')
    ])
    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Please enter a valid email address'),
        Length(max=256)
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required'),
        Length(min=8, max=128, message='Password must be at least 8 characters')
    ])


class RefreshForm(ApiForm):
    refresh_token = StringField('Refresh Token', validators=[
        DataRequired(message='Refresh token is required')
    ])


class LogoutForm(ApiForm):
    refresh_token = StringField('Refresh Token', validators=[Optional()])


class ProfileForm(ApiForm):
    """Editable fields of the current user's profile."""
    username = StringField('Username', validators=[
        Optional(),
        Length(min=3, max=50, message='Username must be between 3 and 50 characters'),
        Regexp(USERNAME_PATTERN, message='Username may only contain letters, numbers, dots, dashes and underscores')
    ])
    bio = StringField('Bio', validators=[Optional(), Length(max=200)])
    avatar_emoji = StringField('Avatar', validators=[Optional(), Length(max=8)])
