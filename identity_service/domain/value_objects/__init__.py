"""Domain value objects."""

from identity_service.domain.value_objects.one_time_code import OneTimeCode

__all__ = ["OneTimeCode"]
