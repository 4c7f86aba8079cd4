from flask_wtf import FlaskForm
from wtforms import FloatField, IntegerField, StringField
from wtforms.validators import AnyOf, InputRequired, Length, Optional, ValidationError

from .models import MovementType
from .services import AdjustmentCommand


class AdjustmentForm(FlaskForm):
    class Meta:
        csrf = False

    # Існування продукту перевіряє сервіс (ConstraintViolation), тут лише формат
    product_id = IntegerField('Продукт', validators=[InputRequired()])
    type = StringField('Тип руху', validators=[InputRequired(), AnyOf([m.value for m in MovementType])])
    qty = FloatField('Кількість', validators=[InputRequired()])
    reference = StringField('Підстава', validators=[Optional(), Length(max=255)])

    def validate_qty(self, field):
        if field.data is not None and field.data <= 0:
            raise ValidationError('Кількість має бути більшою за нуль.')

    def to_command(self) -> AdjustmentCommand:
        return AdjustmentCommand(
            product_id=self.product_id.data,
            type=MovementType(self.type.data),
            qty=self.qty.data,
            reference=self.reference.data or None,
        )
