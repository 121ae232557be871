"""
Mandatory-field checks for submissions.
"""

from typing import Any, Dict

from .base_validator import BaseValidator, ValidationError


class RequiredFieldValidator(BaseValidator):
    """
    Checks that a mandatory answer is present and not blank.

    Fails if:
    - Field is missing from the record
    - Field value is None
    - Field value is an empty or whitespace-only string
    """

    def validate(self, value: Any, record: Dict[str, Any]) -> None:
        if self.field_name not in record:
            raise ValidationError(
                rule_name="required_field",
                field_name=self.field_name,
                message="Field is missing from record"
            )

        if value is None:
            raise ValidationError(
                rule_name="required_field",
                field_name=self.field_name,
                message="Field value is null"
            )

        if isinstance(value, str) and value.strip() == "":
            raise ValidationError(
                rule_name="required_field",
                field_name=self.field_name,
                message="Field value is empty string"
            )

    @property
    def rule_type(self) -> str:
        return "required_field"


class RouteEndpointsValidator(BaseValidator):
    """
    Checks that a description has both its "from" and "to" answers.

    The description text itself is never empty because the template adds
    fixed prefixes, so the check looks at the location answers instead.

    Parameters:
        origin_field: Record key of the "from" answer (default "from_location")
        destination_field: Record key of the "to" answer (default "to_location")
    """

    def validate(self, value: Any, record: Dict[str, Any]) -> None:
        origin_field = self.parameters.get("origin_field", "from_location")
        destination_field = self.parameters.get("destination_field", "to_location")

        missing = [
            name for name in (origin_field, destination_field)
            if not str(record.get(name) or "").strip()
        ]
        if missing:
            raise ValidationError(
                rule_name="route_endpoints",
                field_name=self.field_name,
                message=f"Missing location answer(s): {', '.join(missing)}"
            )

    @property
    def rule_type(self) -> str:
        return "route_endpoints"
