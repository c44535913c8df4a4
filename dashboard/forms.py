from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict
from wtforms import (
    HiddenField,
    PasswordField,
    RadioField,
    SelectField,
    StringField,
    SubmitField,
)
from wtforms.validators import (
    AnyOf,
    DataRequired,
    Email,
    InputRequired,
    Length,
    ValidationError,
)
from wtforms.widgets import NumberInput

from dashboard import db
from dashboard.models import INVOICE_STATUSES, Customer
from dashboard.utils.numeric import MAX_CENTS, coerce_amount, to_cents


def as_formdata(data):
    """Wrap a plain mapping so WTForms can read it as submitted form data."""
    if data is None or hasattr(data, "getlist"):
        return data
    return MultiDict(data)


def load_customer_choices():
    """Return ``(id, name)`` pairs for the customer select box."""
    customers = Customer.query.order_by(Customer.name).all()
    return [("", "Select a customer")] + [(c.id, c.name) for c in customers]


class LoginForm(FlaskForm):
    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField(
        "Password", validators=[DataRequired(), Length(min=6)]
    )
    next_url = HiddenField(name="next")
    submit = SubmitField("Log in")


class CSRFOnlyForm(FlaskForm):
    """Simple form that only provides CSRF protection."""

    pass


class InvoiceForm(FlaskForm):
    """Fields shared by the create and edit invoice pages.

    The HTML names (``customerId``, ``amount`` and ``status``) are the keys
    reported back in validation errors.
    """

    customer_id = SelectField(
        "Customer",
        name="customerId",
        validate_choice=False,
        validators=[InputRequired(message="Please select a customer.")],
    )
    amount = StringField(
        "Amount",
        widget=NumberInput(step="0.01"),
    )
    status = RadioField(
        "Status",
        choices=[(status, status.title()) for status in INVOICE_STATUSES],
        validate_choice=False,
        validators=[AnyOf(INVOICE_STATUSES, message="Please select a status.")],
    )
    submit = SubmitField("Save Invoice")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.customer_id.choices = load_customer_choices()

    def validate_customer_id(self, field):
        if db.session.get(Customer, field.data) is None:
            raise ValidationError("Please select a customer.")

    def validate_amount(self, field):
        value = coerce_amount(field.data)
        if value is None or value <= 0:
            raise ValidationError("Amount must be greater than 0.")
        cents = to_cents(value)
        if cents is None or cents > MAX_CENTS:
            raise ValidationError("Amount is too large.")
        # Sub-cent amounts round down to a zero-cent invoice.
        if cents <= 0:
            raise ValidationError("Amount must be greater than 0.")

    @property
    def field_errors(self):
        """Validation errors keyed by HTML field name."""
        return {field.name: list(field.errors) for field in self if field.errors}
