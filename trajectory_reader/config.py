"""
Configuration module for trajectory reading.

Handles loading and saving reader options from YAML files.
"""

import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Tuple
import logging

from .ascii_codec import DEFAULT_COLUMNS, DEFAULT_COMMENT_PREFIXES, ColumnLayout

logger = logging.getLogger(__name__)

FILE_FORMATS = ('auto', 'sbet', 'pof', 'pos')


@dataclass
class PosOptions:
    """Column layout and line filtering of ASCII POS files."""
    columns: Tuple[str, ...] = DEFAULT_COLUMNS
    accuracy_columns: Tuple[str, ...] = ()
    comment_prefixes: Tuple[str, ...] = DEFAULT_COMMENT_PREFIXES
    header_lines: int = 0  # Leading lines skipped regardless of content

    def layout(self) -> ColumnLayout:
        return ColumnLayout(tuple(self.columns), tuple(self.accuracy_columns))


@dataclass
class RieglOptions:
    """Preamble sizes of Riegl POF/POQ exports."""
    pof_header_size: int = 0  # bytes
    poq_header_size: int = 0  # bytes


@dataclass
class ReaderConfig:
    """
    Main configuration class for trajectory reading.

    Attributes:
        file_format: 'auto' (detect from extension), 'sbet', 'pof' or 'pos'
        trajectory: Optional trajectory path
        accuracy: Optional accuracy path (POQ or SMRMSG)
        find_companion: Look for the accuracy file next to the trajectory
        pos: ASCII POS options
        riegl: Riegl POF/POQ options
    """
    file_format: str = 'auto'
    trajectory: Optional[str] = None
    accuracy: Optional[str] = None
    find_companion: bool = True
    pos: PosOptions = field(default_factory=PosOptions)
    riegl: RieglOptions = field(default_factory=RieglOptions)

    def __post_init__(self):
        if self.file_format not in FILE_FORMATS:
            raise ValueError(
                f"Unknown trajectory format {self.file_format!r}, expected one of {FILE_FORMATS}"
            )

    @classmethod
    def from_yaml(cls, config_path: str) -> "ReaderConfig":
        """
        Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            ReaderConfig object with loaded parameters

        Example YAML structure:
            file_format: pof
            trajectory: "flight.pof"
            accuracy: "flight.poq"
            find_companion: true
            pos:
              columns: [time, latitude, longitude, height, roll, pitch, heading]
              accuracy_columns: [north, east, down]
              comment_prefixes: ["#", "%"]
              header_lines: 1
            riegl:
              pof_header_size: 0
              poq_header_size: 0
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        logger.info(f"Loading configuration from {config_path}")

        pos_data = data.get('pos', {}) or {}
        pos = PosOptions(
            columns=tuple(pos_data.get('columns', DEFAULT_COLUMNS)),
            accuracy_columns=tuple(pos_data.get('accuracy_columns', ())),
            comment_prefixes=tuple(pos_data.get('comment_prefixes', DEFAULT_COMMENT_PREFIXES)),
            header_lines=int(pos_data.get('header_lines', 0)),
        )
        # Fail early on a bad layout rather than at the first line
        pos.layout()

        riegl_data = data.get('riegl', {}) or {}
        riegl = RieglOptions(
            pof_header_size=int(riegl_data.get('pof_header_size', 0)),
            poq_header_size=int(riegl_data.get('poq_header_size', 0)),
        )

        # Resolve paths relative to config file location
        config_dir = path.parent
        trajectory = data.get('trajectory')
        if trajectory:
            trajectory = str(config_dir / trajectory)
        accuracy = data.get('accuracy')
        if accuracy:
            accuracy = str(config_dir / accuracy)

        return cls(
            file_format=data.get('file_format', 'auto'),
            trajectory=trajectory,
            accuracy=accuracy,
            find_companion=bool(data.get('find_companion', True)),
            pos=pos,
            riegl=riegl,
        )

    def to_yaml(self, config_path: str) -> None:
        """Save configuration to a YAML file."""
        data = {
            'file_format': self.file_format,
            'trajectory': self.trajectory,
            'accuracy': self.accuracy,
            'find_companion': self.find_companion,
            'pos': {
                'columns': list(self.pos.columns),
                'accuracy_columns': list(self.pos.accuracy_columns),
                'comment_prefixes': list(self.pos.comment_prefixes),
                'header_lines': self.pos.header_lines,
            },
            'riegl': {
                'pof_header_size': self.riegl.pof_header_size,
                'poq_header_size': self.riegl.poq_header_size,
            },
        }

        with open(config_path, 'w') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

        logger.info(f"Configuration saved to {config_path}")
