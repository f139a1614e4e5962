"""Snack, store, category and review forms."""

from wtforms import StringField, TextAreaField, IntegerField, FloatField, DecimalField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional

from snackspot.models.review import MIN_RATING, MAX_RATING
from . import ApiForm


class NearbySearchForm(ApiForm):
    """Query string of the nearby snack search."""
    lat = FloatField('Latitude', validators=[
        InputRequired(message='Latitude and longitude parameters are required'),
        NumberRange(min=-90, max=90, message='Latitude must be between -90 and 90')
    ])
    lng = FloatField('Longitude', validators=[
        InputRequired(message='Latitude and longitude parameters are required'),
        NumberRange(min=-180, max=180, message='Longitude must be between -180 and 180')
    ])
    radius = FloatField('Radius', validators=[Optional()])
    category_id = IntegerField('Category', validators=[Optional()])
    search = StringField('Search', validators=[Optional(), Length(max=100)])


class SnackForm(ApiForm):
    name = StringField('Name', validators=[
        DataRequired(message='Name is required'),
        Length(max=200)
    ])
    description = TextAreaField('Description', validators=[
        Optional(),
        Length(max=2000)
    ])
    category_id = IntegerField('Category', validators=[
        InputRequired(message='Category is required')
    ])
    store_id = IntegerField('Store', validators=[
        InputRequired(message='Store is required')
    ])


class StoreForm(ApiForm):
    name = StringField('Name', validators=[
        DataRequired(message='Store name is required'),
        Length(max=80)
    ])
    address = StringField('Address', validators=[Optional(), Length(max=120)])
    latitude = DecimalField('Latitude', places=6, validators=[
        InputRequired(message='Latitude is required'),
        NumberRange(min=-90, max=90, message='Latitude must be between -90 and 90')
    ])
    longitude = DecimalField('Longitude', places=6, validators=[
        InputRequired(message='Longitude is required'),
        NumberRange(min=-180, max=180, message='Longitude must be between -180 and 180')
    ])


class CategoryForm(ApiForm):
    name = StringField('Name', validators=[
        DataRequired(message='Category name is required'),
        Length(max=100)
    ])
    description = StringField('Description', validators=[Optional(), Length(max=500)])


class ReviewForm(ApiForm):
    snack_id = IntegerField('Snack', validators=[
        InputRequired(message='Snack is required')
    ])
    rating = IntegerField('Rating', validators=[
        InputRequired(message='Rating is required'),
        NumberRange(min=MIN_RATING, max=MAX_RATING, message='Rating must be between 1 and 5')
    ])
    comment = TextAreaField('Comment', validators=[Optional(), Length(max=1000)])


class ReviewUpdateForm(ApiForm):
    rating = IntegerField('Rating', validators=[
        InputRequired(message='Rating is required'),
        NumberRange(min=MIN_RATING, max=MAX_RATING, message='Rating must be between 1 and 5')
    ])
    comment = TextAreaField('Comment', validators=[Optional(), Length(max=1000)])
