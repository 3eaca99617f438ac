"""Value objects shared by pack slips and shipping labels."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, String

from pickpack.domain import pickpack

ADDRESS_REQUIRED_FIELDS = ("name", "address", "city", "postal_code", "country")


@pickpack.value_object
class Address:
    """A postal address. Only ``state`` may be left out."""

    name = String(required=True, max_length=255)
    address = String(required=True, max_length=500)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@pickpack.value_object
class Dimensions:
    """Package dimensions; any side may be unknown."""

    length = Float(min_value=0.0)
    width = Float(min_value=0.0)
    height = Float(min_value=0.0)

    @invariant.post
    def at_least_one_side_is_known(self):
        if self.length is None and self.width is None and self.height is None:
            raise ValidationError({"dimensions": ["At least one of length, width or height is required"]})
