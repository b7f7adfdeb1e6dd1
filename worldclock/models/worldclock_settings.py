"""
Data model for World Clock settings.
"""

from dataclasses import dataclass

DST_POLICY_LENIENT = "lenient"
DST_POLICY_STRICT = "strict"
DST_POLICIES = (DST_POLICY_LENIENT, DST_POLICY_STRICT)


@dataclass
class WorldClockSettings:
    """
    Encapsulates all configurable options of the world clock feature.

    Attributes:
        clock_count (int): Number of clock panels (>= 1).
        update_interval_ms (int): Refresh cadence in milliseconds.
        use_24h (bool): 24-hour clock if True, 12-hour with AM/PM if False.
        show_seconds (bool): Whether to render seconds.
        show_date (bool): Whether to render the date line.
        dst_policy (str): "lenient" resolves DST gaps/overlaps to a default
            instant, "strict" rejects them.
        default_hour (int): Initial value of the conversion hour field.
        default_minute (int): Initial value of the conversion minute field.
    """
    clock_count: int = 4
    update_interval_ms: int = 1000
    use_24h: bool = True
    show_seconds: bool = True
    show_date: bool = True
    dst_policy: str = DST_POLICY_LENIENT
    default_hour: int = 12
    default_minute: int = 0

    @property
    def strict_dst(self) -> bool:
        return self.dst_policy == DST_POLICY_STRICT
