"""
Value types shared by the helper and the statement builders
"""

from typing import Dict, List, Mapping, Optional, Union

# A single column value as SQLite stores it
Scalar = Optional[Union[int, float, str, bytes]]

# One record, written or read; keys are column names in declaration order
Row = Mapping[str, Scalar]

# Column -> value equality tests, conjoined with AND
Conditions = Mapping[str, Scalar]

# Rows as returned by read operations
ResultRows = List[Dict[str, Scalar]]
