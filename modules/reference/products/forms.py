# modules/reference/products/forms.py

from flask_wtf import FlaskForm
from sqlalchemy import func
from wtforms import FloatField, StringField
from wtforms.validators import DataRequired, Length, NumberRange, Optional, ValidationError

from modules.reference.products.models import Product


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class ProductForm(FlaskForm):
    class Meta:
        csrf = False

    code = StringField('Код', filters=[_strip], validators=[DataRequired(), Length(max=64)])
    name = StringField('Назва', filters=[_strip], validators=[DataRequired(), Length(max=255)])
    category = StringField('Категорія', validators=[Optional(), Length(max=100)])
    unit = StringField('Одиниця виміру', validators=[Optional(), Length(max=32)])

    purchase_price = FloatField('Ціна закупівлі', default=0.0, validators=[Optional(), NumberRange(min=0)])
    sales_price = FloatField('Ціна продажу', default=0.0, validators=[Optional(), NumberRange(min=0)])
    stock_qty = FloatField('Залишок', default=0.0, validators=[Optional()])

    def validate_code(self, field):
        code = (field.data or '').strip()
        if not code:
            return
        if Product.query.filter(func.lower(Product.code) == func.lower(code)).first():
            raise ValidationError('Продукт з таким кодом вже існує.')
