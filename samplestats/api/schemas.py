from typing import List, Optional
from pydantic import BaseModel, FiniteFloat

# Input schema for /stats endpoints
class SampleIn(BaseModel):
    numbers: List[FiniteFloat]  # Sample to describe; may be empty

    model_config = {"extra": "forbid"}  # Forbid extra fields in input

# Output schema for /stats; None (null) marks an undefined statistic
class StatisticsOut(BaseModel):
    count: int                # Sample size
    mean: Optional[float]     # Arithmetic mean (0.0 for an empty sample)
    stddev: Optional[float]   # Population standard deviation
    median: Optional[float]   # Lower median
    l2: Optional[float]       # Euclidean norm (0.0 for an empty sample)

# Output schema for /stats/{statistic}
class StatisticOut(BaseModel):
    statistic: str
    count: int
    value: Optional[float]
