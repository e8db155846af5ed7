# sharedstreets/errors.py


class SharedStreetsError(ValueError):
    """Base class for every validation failure raised by this package."""


class InvalidReference(SharedStreetsError):
    """Location reference carries an outbound bearing without a distance to the next reference."""


class InvalidEnumValue(SharedStreetsError):
    """Road class / form of way conversion got a value outside its table."""


class InvalidGeometry(SharedStreetsError):
    """Missing or malformed coordinate data."""
