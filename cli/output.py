#!/usr/bin/env python3
"""
Output Formatting Module for TapHeir CLI

Renders command results as JSON, YAML or a plain key/value table.
"""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

import yaml
from tabulate import tabulate


OUTPUT_FORMATS = ['table', 'json', 'yaml']


class OutputFormatter:
    """Output formatter for CLI results."""

    def __init__(self, format_type: str = 'table'):
        """
        Initialize output formatter.

        Args:
            format_type: Output format (table, json, yaml)
        """
        if format_type not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format: {format_type}")
        self.format_type = format_type

    def format(self, data: Any, headers: Optional[List[str]] = None) -> str:
        """
        Format data according to specified format type.

        Args:
            data: Data to format
            headers: Optional headers for list tables

        Returns:
            Formatted string output
        """
        if self.format_type == 'json':
            return self.format_json(data)
        elif self.format_type == 'yaml':
            return self.format_yaml(data)
        else:
            return self.format_table(data, headers)

    def format_json(self, data: Any) -> str:
        """Format data as JSON."""
        return json.dumps(data, indent=2, default=self._json_encoder)

    def format_yaml(self, data: Any) -> str:
        """Format data as YAML."""
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip()

    def format_table(self, data: Any, headers: Optional[List[str]] = None) -> str:
        """Format data as a table."""
        if isinstance(data, dict):
            rows = [[key, self._format_value(value)]
                    for key, value in self._flatten_dict(data).items()]
            return tabulate(rows, tablefmt='plain')
        elif isinstance(data, list):
            if not data:
                return "No data available"
            if isinstance(data[0], dict):
                headers = headers or list(data[0].keys())
                rows = [[self._format_value(item.get(h, '')) for h in headers] for item in data]
                return tabulate(rows, headers=headers, tablefmt='grid')
            return '\n'.join(str(item) for item in data)
        else:
            return str(data)

    def _format_value(self, value: Any) -> str:
        """Format individual value for display."""
        if value is None:
            return 'null'
        elif isinstance(value, bool):
            return 'true' if value else 'false'
        elif isinstance(value, datetime):
            return value.strftime('%Y-%m-%d %H:%M:%S')
        elif isinstance(value, list):
            return ', '.join(str(item) for item in value)
        return str(value)

    def _flatten_dict(self, d: Dict[str, Any], parent_key: str = '', sep: str = '.') -> Dict[str, Any]:
        """Flatten nested dictionary into dotted keys."""
        items = []
        for k, v in d.items():
            new_key = f"{parent_key}{sep}{k}" if parent_key else k
            if isinstance(v, dict):
                items.extend(self._flatten_dict(v, new_key, sep=sep).items())
            else:
                items.append((new_key, v))
        return dict(items)

    def _json_encoder(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, bytes):
            return obj.hex()
        return str(obj)
