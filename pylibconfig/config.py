"""
Parsed configuration with dot-path lookups.

    config = parse_config('app = { name = "demo"; port = 8080; };')
    config.lookup_string("app.name")    # "demo"
    config.lookup_int("app.port")       # 8080
    config.lookup("app")                # GroupValue(...)
"""

from dataclasses import dataclass, field
from typing import Any

from .const import INT32_MAX, INT32_MIN
from .errors import ErrorKind, SettingLookupError
from .value import (
    BoolValue,
    FloatValue,
    GroupValue,
    Int64Value,
    IntValue,
    StringValue,
    Value,
    ValueType,
)


# Marks "no default given" so that None stays usable as a default
_MISSING: Any = object()


@dataclass
class Config:
    """
    Root of a parsed configuration: a group of top-level settings.

    Every lookup takes a dot-separated path such as "database.pool.size".
    Empty path segments are ignored, so "" and "." both address the root.
    """
    root: GroupValue = field(default_factory=GroupValue)
    filename: str = "<string>"

    def lookup(self, path: str) -> Value:
        """
        Find the value at a dot-separated path.

        Raises:
            SettingLookupError: NOT_A_GROUP if the path descends into a
                non-group value, SETTING_NOT_FOUND if a segment is absent
        """
        current: Value = self.root

        for segment in path.split("."):
            if not segment:
                continue

            if not isinstance(current, GroupValue):
                raise SettingLookupError(
                    f"cannot look up '{segment}' in {current.type} value at '{path}'",
                    ErrorKind.NOT_A_GROUP,
                    path=path,
                    segment=segment,
                )

            if segment not in current.entries:
                raise SettingLookupError(
                    f"setting '{segment}' not found at '{path}'",
                    ErrorKind.SETTING_NOT_FOUND,
                    path=path,
                    segment=segment,
                )

            current = current.entries[segment]

        return current

    def _find(self, path: str, default: Any) -> Value | None:
        """Look up a path; None means "absent, use the default"."""
        try:
            return self.lookup(path)
        except SettingLookupError as e:
            if e.kind is ErrorKind.SETTING_NOT_FOUND and default is not _MISSING:
                return None
            raise

    @staticmethod
    def _mismatch(path: str, expected: ValueType, value: Value) -> SettingLookupError:
        return SettingLookupError(
            f"value at '{path}' is {value.type}, not {expected}",
            ErrorKind.TYPE_MISMATCH,
            path=path,
            expected=expected,
            actual=value.type,
        )

    def lookup_int(self, path: str, default: Any = _MISSING) -> int:
        """
        Get a 32-bit integer.

        An int64 value is accepted when it fits in 32 bits.

        Raises:
            SettingLookupError: TYPE_MISMATCH for non-integers,
                INTEGER_OUT_OF_RANGE for int64 values beyond 32 bits
        """
        value = self._find(path, default)
        if value is None:
            return default

        if isinstance(value, IntValue):
            return value.value

        if isinstance(value, Int64Value):
            if not INT32_MIN <= value.value <= INT32_MAX:
                raise SettingLookupError(
                    f"int64 value {value.value} at '{path}' does not fit in 32 bits",
                    ErrorKind.INTEGER_OUT_OF_RANGE,
                    path=path,
                    expected=ValueType.INT,
                    actual=ValueType.INT64,
                )
            return value.value

        raise self._mismatch(path, ValueType.INT, value)

    def lookup_int64(self, path: str, default: Any = _MISSING) -> int:
        """Get a 64-bit integer; 32-bit values are widened."""
        value = self._find(path, default)
        if value is None:
            return default

        if isinstance(value, (IntValue, Int64Value)):
            return value.value

        raise self._mismatch(path, ValueType.INT64, value)

    def lookup_float(self, path: str, default: Any = _MISSING) -> float:
        """Get a float. Integers are not converted."""
        value = self._find(path, default)
        if value is None:
            return default

        if not isinstance(value, FloatValue):
            raise self._mismatch(path, ValueType.FLOAT, value)
        return value.value

    def lookup_bool(self, path: str, default: Any = _MISSING) -> bool:
        """Get a boolean."""
        value = self._find(path, default)
        if value is None:
            return default

        if not isinstance(value, BoolValue):
            raise self._mismatch(path, ValueType.BOOL, value)
        return value.value

    def lookup_string(self, path: str, default: Any = _MISSING) -> str:
        """Get a string."""
        value = self._find(path, default)
        if value is None:
            return default

        if not isinstance(value, StringValue):
            raise self._mismatch(path, ValueType.STRING, value)
        return value.value

    def get_value(self, path: str, default: Any = None) -> Any:
        """Get the value at path as native Python objects, or default if absent."""
        value = self._find(path, default)
        if value is None:
            return default
        return value.to_python()

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        try:
            self.lookup(path)
        except SettingLookupError:
            return False
        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert the whole configuration to a native dict."""
        return self.root.to_python()

