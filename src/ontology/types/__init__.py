from .temporal import TemporalValue

__all__ = ["TemporalValue"]
