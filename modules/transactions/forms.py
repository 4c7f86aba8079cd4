# modules/transactions/forms.py

from flask_wtf import FlaskForm
from wtforms import DateField, FieldList, FloatField, FormField, StringField
from wtforms.validators import AnyOf, DataRequired, InputRequired, Length, NumberRange, Optional, ValidationError
from wtforms_sqlalchemy.fields import QuerySelectField

from modules.common.forms import _id
from modules.reference.employees.models import Employee
from modules.reference.partners.models import Partner
from modules.reference.products.models import Product
from .models import TransactionStatus, TransactionType
from .services import CreateTransactionCommand, ItemLine, UpdateTransactionCommand

TYPE_CHOICES = [t.value for t in TransactionType]
STATUS_CHOICES = [s.value for s in TransactionStatus]


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class TransactionItemForm(FlaskForm):
    class Meta:
        csrf = False  # вимикаємо CSRF для вкладеної форми

    product_id = QuerySelectField(
        'Продукт',
        query_factory=lambda: Product.query.order_by(Product.id).all(),
        get_label='name',
        allow_blank=False,
    )
    qty = FloatField('Кількість', validators=[InputRequired()])
    price = FloatField('Ціна', validators=[InputRequired(), NumberRange(min=0)])
    subtotal = FloatField('Сума', validators=[Optional()])  # якщо не передана, то qty * price

    def validate_qty(self, field):
        if field.data is not None and field.data <= 0:
            raise ValidationError('Кількість має бути більшою за нуль.')

    def to_line(self) -> ItemLine:
        subtotal = self.subtotal.data
        if subtotal is None:
            subtotal = self.qty.data * self.price.data
        return ItemLine(
            product_id=_id(self.product_id.data),
            qty=self.qty.data,
            price=self.price.data,
            subtotal=subtotal,
        )


class TransactionCreateForm(FlaskForm):
    class Meta:
        csrf = False

    type = StringField('Тип документа', validators=[InputRequired(), AnyOf(TYPE_CHOICES)])
    number = StringField('Номер', filters=[_strip], validators=[DataRequired(), Length(max=64)])
    date = DateField('Дата', format='%Y-%m-%d', validators=[InputRequired()])

    partner_id = QuerySelectField(
        'Контрагент',
        query_factory=lambda: Partner.query.order_by(Partner.name).all(),
        get_label='name',
        allow_blank=True,
    )
    employee_id = QuerySelectField(
        'Відповідальний',
        query_factory=lambda: Employee.query.order_by(Employee.name).all(),
        get_label='name',
        allow_blank=True,
    )

    status = StringField('Статус', default=TransactionStatus.DRAFT.value,
                         validators=[Optional(), AnyOf(STATUS_CHOICES)])
    total_amount = FloatField('Разом', default=0.0, validators=[Optional()])

    items = FieldList(FormField(TransactionItemForm), min_entries=0)

    def to_command(self) -> CreateTransactionCommand:
        return CreateTransactionCommand(
            type=TransactionType(self.type.data),
            number=self.number.data,
            date=self.date.data,
            partner_id=_id(self.partner_id.data),
            employee_id=_id(self.employee_id.data),
            status=TransactionStatus(self.status.data or TransactionStatus.DRAFT.value),
            total_amount=self.total_amount.data or 0.0,
            items=tuple(entry.form.to_line() for entry in self.items.entries),
        )


class TransactionUpdateForm(FlaskForm):
    """
    Часткове оновлення: змінюються лише передані поля.
    items_supplied=True означає, що клієнт передав ключ "items" (навіть порожній список).
    """

    class Meta:
        csrf = False

    type = StringField('Тип документа', validators=[Optional(), AnyOf(TYPE_CHOICES)])
    status = StringField('Статус', validators=[Optional(), AnyOf(STATUS_CHOICES)])
    total_amount = FloatField('Разом', validators=[Optional()])
    items = FieldList(FormField(TransactionItemForm), min_entries=0)

    def __init__(self, *args, **kwargs):
        self.items_supplied = kwargs.pop('items_supplied', False)
        super().__init__(*args, **kwargs)

    def to_command(self) -> UpdateTransactionCommand:
        items = None
        if self.items_supplied:
            items = tuple(entry.form.to_line() for entry in self.items.entries)
        return UpdateTransactionCommand(
            type=TransactionType(self.type.data) if self.type.data else None,
            status=TransactionStatus(self.status.data) if self.status.data else None,
            total_amount=self.total_amount.data,
            items=items,
        )
