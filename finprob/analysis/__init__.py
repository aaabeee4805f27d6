from .counting import CardinalityBound, wolfowitz_bound, cardinality_bound

__all__ = ["CardinalityBound", "wolfowitz_bound", "cardinality_bound"]
