"""Flight-plan import adapter for JSON and CSV uploads"""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from ..exceptions import FlightValidationError
from ..schemas.raw_flight import RAW_FLIGHTS_ADAPTER, RawFlight


logger = logging.getLogger(__name__)

# Column name variants accepted in CSV headers, in lookup order
CSV_COLUMNS = {
    'ACID': ('ACID',),
    'Plane type': ('Plane type', 'plane_type'),
    'route': ('route',),
    'altitude': ('altitude',),
    'departure airport': ('departure airport', 'departure_airport'),
    'arrival airport': ('arrival airport', 'arrival_airport'),
    'departure time': ('departure time', 'departure_time'),
    'aircraft speed': ('aircraft speed', 'aircraft_speed'),
    'passengers': ('passengers',),
    'is_cargo': ('is_cargo',),
}

NUMERIC_COLUMNS = ('altitude', 'departure time', 'aircraft speed', 'passengers')


class FlightImportAdapter:
    """Parse uploaded flight-plan text into validated ``RawFlight`` records.

    Validation is all-or-nothing: one bad record rejects the whole batch.
    """

    def __init__(self, source_file: Optional[Path] = None):
        self.source_file = source_file

    def load_file(self) -> List[RawFlight]:
        """Read ``source_file`` and parse it as JSON or CSV"""
        if self.source_file is None:
            raise ValueError("No source file configured")

        try:
            with open(self.source_file, 'r', encoding='utf-8') as f:
                text = f.read()
        except (FileNotFoundError, UnicodeDecodeError) as e:
            raise FlightValidationError(f"Failed to load flight file {self.source_file}: {e}")

        flights = self.parse_text(text)
        logger.info(f"Loaded {len(flights)} flights from {self.source_file}")
        return flights

    def parse_text(self, text: str) -> List[RawFlight]:
        """Parse JSON (array of records) or CSV (header row) text"""
        if not text.strip():
            return []

        if self._is_likely_json(text):
            return self._parse_json(text)

        return self._parse_csv(text)

    @staticmethod
    def _is_likely_json(text: str) -> bool:
        trimmed = text.strip()
        return trimmed.startswith('[') or trimmed.startswith('{')

    def _parse_json(self, text: str) -> List[RawFlight]:
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as e:
            raise FlightValidationError(f"Malformed JSON flight data: {e}")

        return self._validate(parsed)

    def _parse_csv(self, text: str) -> List[RawFlight]:
        lines = [line.strip() for line in text.splitlines()]
        lines = [line for line in lines if line]

        if not lines:
            return []

        rows = list(csv.reader(lines))
        headers = [header.strip() for header in rows[0]]

        records = []
        for cells in rows[1:]:
            record = {}
            for idx, header in enumerate(headers):
                record[header] = cells[idx].strip() if idx < len(cells) else ""
            records.append(self._map_csv_record(record))

        return self._validate(records)

    def _map_csv_record(self, record: Dict[str, str]) -> Dict[str, Any]:
        mapped: Dict[str, Any] = {}
        for field_name, variants in CSV_COLUMNS.items():
            value = self._first_present(record, variants)
            if field_name in NUMERIC_COLUMNS:
                mapped[field_name] = self._to_number(value if value is not None else "0")
            elif field_name == 'is_cargo':
                mapped[field_name] = (value if value is not None else "false").lower() == "true"
            else:
                mapped[field_name] = value if value is not None else ""
        return mapped

    @staticmethod
    def _first_present(record: Dict[str, str], names) -> Optional[str]:
        for name in names:
            if name in record:
                return record[name]
        return None

    @staticmethod
    def _to_number(value: str) -> Union[int, float, str]:
        """Convert a CSV cell to a number; blanks count as zero.

        Unparseable cells are returned unchanged so that schema validation
        rejects them.
        """
        stripped = value.strip()
        if not stripped:
            return 0
        try:
            return int(stripped)
        except ValueError:
            pass
        try:
            number = float(stripped)
        except ValueError:
            return value
        if number.is_integer():
            return int(number)
        return number

    @staticmethod
    def _validate(data: Any) -> List[RawFlight]:
        try:
            return RAW_FLIGHTS_ADAPTER.validate_python(data)
        except ValidationError as e:
            errors = e.errors(include_url=False)
            logger.warning(f"Rejected flight batch: {len(errors)} validation error(s)")
            raise FlightValidationError(
                f"Flight batch failed validation: {len(errors)} error(s)", errors
            )
