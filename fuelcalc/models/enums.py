from enum import Enum


class Currency(str, Enum):
    BAM = "BAM"
    EUR = "EUR"
    USD = "USD"


HOME_CURRENCY = Currency.BAM


class TrafficType(str, Enum):
    EXPORT = "export"
    DOMESTIC = "domestic"

    @classmethod
    def parse(cls, raw: object) -> "TrafficType":
        """Accept enum values as well as the labels used by the operator UI."""
        if isinstance(raw, TrafficType):
            return raw
        if raw is None or str(raw).strip() == "":
            return cls.EXPORT
        key = str(raw).strip().lower()
        if key in _TRAFFIC_LABELS:
            return _TRAFFIC_LABELS[key]
        raise ValueError(f"Unknown traffic type: {raw!r}")


_TRAFFIC_LABELS = {
    "export": TrafficType.EXPORT,
    "izvoz": TrafficType.EXPORT,
    "domestic": TrafficType.DOMESTIC,
    "unutarnji saobraćaj": TrafficType.DOMESTIC,
    "unutarnji saobracaj": TrafficType.DOMESTIC,
}


class RateProvenance(str, Enum):
    SYSTEM = "system"
    ESTIMATED = "estimated"


class SyncState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
