"""
fuzzyfolio/export_engine.py
---------------------------
Text serialization of a point collection.

Formats
-------
* ``json`` — pretty-printed (2-space) array of point records with keys
  ``model, return, variance, entropy[, alpha, beta]``; floats keep their full
  ``repr`` precision and absent fuzzy parameters are omitted.
* ``csv``  — header ``model,return,variance,entropy,alpha,beta`` followed by
  one row per point, every number fixed to 6 decimals and absent fuzzy
  parameters left empty.  No quoting: model labels never contain commas.
  The last row carries no line terminator; an export with no rows is the
  header line alone, still newline-terminated.

Writing the text somewhere is the caller's job; this module only produces
and parses strings.
"""

from __future__ import annotations

import io
import json
import logging
from typing import Iterable, List

import pandas as pd

from fuzzyfolio.constants import (
    CSV_COLUMNS,
    CSV_FLOAT_FORMAT,
    EXPORT_FILENAME_TEMPLATE,
    MIME_TYPES,
)
from fuzzyfolio.enums import ExportFormat
from fuzzyfolio.models import ScoredPoint, points_to_frame

logger = logging.getLogger(__name__)


class ExportEngine:
    """Pure, stateless serializer.  All methods are static."""

    @staticmethod
    def serialize(points: Iterable[ScoredPoint], fmt) -> str:
        """
        Render *points* as ``"json"`` or ``"csv"`` text.

        Raises
        ------
        ValueError
            If *fmt* is not a known export format.
        """
        fmt = ExportFormat.parse(fmt)
        points = list(points)
        logger.debug("Serializing %d points as %s", len(points), fmt.value)

        if fmt is ExportFormat.JSON:
            return ExportEngine._to_json(points)
        return ExportEngine._to_csv(points)

    @staticmethod
    def deserialize(text: str, fmt) -> List[ScoredPoint]:
        """
        Parse text produced by :meth:`serialize`.

        JSON round-trips exactly; CSV values come back rounded to 6 decimals.

        Raises
        ------
        ValueError
            On an unknown format, malformed text or an invalid record.
        """
        fmt = ExportFormat.parse(fmt)
        if fmt is ExportFormat.JSON:
            return ExportEngine._from_json(text)
        return ExportEngine._from_csv(text)

    @staticmethod
    def export_filename(total: int, fmt) -> str:
        """Download name, e.g. ``fuzzyfolio_11626_portfolios.csv``."""
        fmt = ExportFormat.parse(fmt)
        return EXPORT_FILENAME_TEMPLATE.format(total=total, ext=fmt.value)

    @staticmethod
    def mime_type(fmt) -> str:
        return MIME_TYPES[ExportFormat.parse(fmt)]

    # ------------------------------------------------------------------ #
    #  JSON
    # ------------------------------------------------------------------ #

    @staticmethod
    def _to_json(points: List[ScoredPoint]) -> str:
        return json.dumps([p.to_dict() for p in points], indent=2)

    @staticmethod
    def _from_json(text: str) -> List[ScoredPoint]:
        try:
            records = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Malformed JSON export: {exc}") from exc

        if not isinstance(records, list):
            raise ValueError("JSON export must be an array of point records.")
        points = []
        for i, record in enumerate(records):
            if not isinstance(record, dict):
                raise ValueError(
                    f"JSON export records must be objects (item {i} is {type(record).__name__})."
                )
            points.append(ScoredPoint.from_dict(record))
        return points

    # ------------------------------------------------------------------ #
    #  CSV
    # ------------------------------------------------------------------ #

    @staticmethod
    def _to_csv(points: List[ScoredPoint]) -> str:
        frame = points_to_frame(points)
        text = frame.to_csv(
            index=False,
            float_format=CSV_FLOAT_FORMAT,
            na_rep="",
            lineterminator="\n",
        )
        # rows are newline-joined after a newline-terminated header, so only
        # a non-empty export drops the final terminator
        if points and text.endswith("\n"):
            return text[:-1]
        return text

    @staticmethod
    def _from_csv(text: str) -> List[ScoredPoint]:
        frame = pd.read_csv(io.StringIO(text), dtype={"model": str}, float_precision="round_trip")
        if list(frame.columns) != list(CSV_COLUMNS):
            raise ValueError(
                f"CSV header must be {','.join(CSV_COLUMNS)} "
                f"(got {','.join(map(str, frame.columns))})."
            )

        points = []
        for row in frame.itertuples(index=False):
            record = {
                "model":    row.model,
                "return":   row[1],
                "variance": row.variance,
                "entropy":  row.entropy,
            }
            if pd.notna(row.alpha) or pd.notna(row.beta):
                record["alpha"] = None if pd.isna(row.alpha) else row.alpha
                record["beta"] = None if pd.isna(row.beta) else row.beta
            points.append(ScoredPoint.from_dict(record))
        return points
