"""
Merge newly derived column descriptors into a table's existing columns.

For each candidate column the reconciler either adds it verbatim, adds a
renamed copy when an existing column with a colliding name holds a different
type, or reuses a compatible existing column. The returned mapping tells the
row builder which column each candidate's value belongs in.

Name collisions are detected by prefix: an existing column collides with a
candidate when the existing name *starts with* the candidate name. This means
a candidate ``Age`` collides with an existing ``AgeGroup``. The rule is kept
for compatibility with tables built by earlier versions; pass
``ColumnMatchMode.EXACT`` to compare names for equality instead.
"""

import logging
from typing import Dict, List, MutableSequence, Sequence

from rowmapper.constants import ColumnMatchMode
from rowmapper.entities.column import ColumnDescriptor
from rowmapper.entities.util import (
    assert_parameter_not_null,
    assert_type,
    is_empty,
)
from rowmapper.shared_exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


def _names_collide(
    existing_name: str, candidate_name: str, match_mode: ColumnMatchMode
) -> bool:
    if match_mode == ColumnMatchMode.EXACT:
        return existing_name == candidate_name
    return existing_name.startswith(candidate_name)


def _disambiguated_name(
    candidate: ColumnDescriptor,
    mismatch_count: int,
    taken: set[str],
) -> str:
    suffix = mismatch_count
    name = f"{candidate.name}{suffix}"
    while name in taken:
        suffix += 1
        name = f"{candidate.name}{suffix}"
    return name


def reconcile(
    existing_columns: MutableSequence[ColumnDescriptor],
    candidate_columns: Sequence[ColumnDescriptor],
    match_mode: ColumnMatchMode = ColumnMatchMode.PREFIX,
) -> Dict[ColumnDescriptor, ColumnDescriptor]:
    """
    Reconcile ``candidate_columns`` against ``existing_columns``.

    ``existing_columns`` is mutated in place: verbatim and renamed columns
    are appended to it, in candidate order. Candidates are processed in
    order and each one sees the columns appended for the candidates before
    it.

    For each candidate ``c``:

    - no existing column collides with ``c.name``: ``c`` is appended and
      maps to itself.
    - a colliding column has a different ``data_type``: a new column named
      ``c.name`` followed by the number of such columns is appended, with
      ``caption`` set to ``c.name``. A type conflict wins even when a
      same-typed collision also exists, unless that same-typed column is the
      renamed column an earlier pass created for ``c.name`` (its
      ``renamed_from`` is ``c.name``), which is then reused. A column whose
      caption merely equals ``c.name`` is not reused.
    - otherwise ``c`` maps to the first same-typed colliding column and
      nothing is added.

    Args:
        existing_columns: The table's live columns.
        candidate_columns: Columns derived from an object, in property order.
        match_mode: How names are compared.

    Returns:
        Dict[ColumnDescriptor, ColumnDescriptor]: Each candidate mapped to
        the column in ``existing_columns`` that should receive its value.

    Raises:
        NullReferenceError: If either sequence is None.
        InvalidArgumentError: If ``candidate_columns`` is empty.
    """
    assert_parameter_not_null(
        existing_columns, "Cannot add columns to a null table.", "existing_columns"
    )
    assert_parameter_not_null(
        candidate_columns,
        "The list of candidate columns is null.",
        "candidate_columns",
    )
    if is_empty(candidate_columns):
        raise InvalidArgumentError(
            "The list of candidate columns is empty.", "candidate_columns"
        )
    match_mode = ColumnMatchMode(match_mode)

    mapping: Dict[ColumnDescriptor, ColumnDescriptor] = {}
    for candidate in candidate_columns:
        assert_type("candidate", candidate, ColumnDescriptor)

        colliding = [
            column
            for column in existing_columns
            if _names_collide(column.name, candidate.name, match_mode)
        ]
        matching: List[ColumnDescriptor] = [
            column for column in colliding if column.data_type == candidate.data_type
        ]
        mismatched: List[ColumnDescriptor] = [
            column for column in colliding if column.data_type != candidate.data_type
        ]

        if not matching and not mismatched:
            existing_columns.append(candidate)
            mapping[candidate] = candidate
            logger.debug("Added column %s", candidate.name)
        elif mismatched:
            renamed = next(
                (
                    column
                    for column in existing_columns
                    if column.renamed_from == candidate.name
                    and column.data_type == candidate.data_type
                ),
                None,
            )
            if renamed is not None:
                mapping[candidate] = renamed
                logger.debug(
                    "Reused renamed column %s for %s", renamed.name, candidate.name
                )
                continue

            taken = {column.name for column in existing_columns}
            new_column = ColumnDescriptor(
                name=_disambiguated_name(candidate, len(mismatched), taken),
                data_type=candidate.data_type,
                caption=candidate.name,
                expression=candidate.expression,
                renamed_from=candidate.name,
            )
            existing_columns.append(new_column)
            mapping[candidate] = new_column
            logger.debug(
                "Column %s collides with %d column(s) of another type, added %s",
                candidate.name,
                len(mismatched),
                new_column.name,
            )
        else:
            mapping[candidate] = matching[0]
            logger.debug(
                "Mapped column %s to existing column %s",
                candidate.name,
                matching[0].name,
            )

    return mapping
