from __future__ import annotations
import json
import logging
import os
from dataclasses import asdict
from typing import Optional

from params import Params
from projection import ProjectionInput
from validation import clamp_inputs

logger = logging.getLogger(__name__)


class PreferenceStore:
    """Keeps the last used projection inputs in a small JSON file"""

    def __init__(self, path: Optional[str] = None, params: Optional[Params] = None) -> None:
        self.params = params or Params()
        self.path = path or self.params.preferences_file

    def defaults(self) -> ProjectionInput:
        return ProjectionInput(
            start_age=self.params.default_start_age,
            monthly_savings=float(self.params.default_monthly_savings),
            annual_return_rate=self.params.default_annual_return_rate,
        )

    def load(self) -> ProjectionInput:
        """
        Read saved inputs, falling back to defaults.

        A missing file is normal on first use. An unreadable or malformed file
        is logged and ignored. Saved values are clamped into range.
        """
        if not os.path.exists(self.path):
            return self.defaults()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return clamp_inputs(
                data["start_age"],
                data["monthly_savings"],
                data["annual_return_rate"],
                self.params,
            )
        except (OSError, ValueError, KeyError, TypeError, OverflowError) as e:
            logger.warning(f"Ignoring unreadable preferences in {self.path}: {e}")
            return self.defaults()

    def save(self, inputs: ProjectionInput) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(asdict(inputs), f, indent=2)

    def clear(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)
