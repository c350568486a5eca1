"""
Format selection and file opening.

Picks the reader for a trajectory file from its extension (or an
explicit format), finds the accuracy companion file when one exists, and
opens the files. This is the only module that touches paths; readers
receive open file objects and close them when they are done.

Extensions:
    - .sbet, .out: SBET (accuracy companion: smrmsg_*.out or <stem>.smrmsg)
    - .pof: Riegl POF (accuracy companion: <stem>.poq)
    - .pos, .txt, .csv: ASCII POS
"""

import logging
from contextlib import ExitStack
from pathlib import Path
from typing import Iterator, Optional, Union

from .config import ReaderConfig
from .correlation import correlate
from .pos import PosReader
from .records import Record
from .riegl import PofReader, read_pof_poq
from .sbet import read_sbet

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

EXTENSIONS = {
    '.sbet': 'sbet',
    '.out': 'sbet',
    '.pof': 'pof',
    '.pos': 'pos',
    '.txt': 'pos',
    '.csv': 'pos',
}


def detect_format(path: PathLike) -> str:
    """Trajectory format of a file, from its extension."""
    ext = Path(path).suffix.lower()
    try:
        return EXTENSIONS[ext]
    except KeyError:
        raise ValueError(
            f"Cannot detect trajectory format of {path}: unknown extension {ext!r}"
        ) from None


def companion_path(path: PathLike, file_format: str) -> Optional[Path]:
    """
    Conventional accuracy file of a trajectory, if it exists.

    Args:
        path: Trajectory path
        file_format: 'sbet' or 'pof'

    Returns:
        Path of the existing companion file, or None
    """
    path = Path(path)
    candidates = []
    if file_format == 'pof':
        candidates = [path.with_suffix('.poq'), path.with_suffix('.POQ')]
    elif file_format == 'sbet':
        if path.name.lower().startswith('sbet'):
            candidates.append(path.with_name('smrmsg' + path.name[4:]))
        candidates.append(path.with_suffix('.smrmsg'))

    for candidate in candidates:
        if candidate.exists():
            logger.debug(f"Found accuracy file {candidate} for {path}")
            return candidate
    return None


def read_trajectory(
    path: PathLike,
    accuracy_path: Optional[PathLike] = None,
    file_format: str = 'auto',
    config: Optional[ReaderConfig] = None,
) -> Iterator[Record]:
    """
    Open a trajectory file and return its records.

    Args:
        path: Trajectory file
        accuracy_path: Accuracy file (POQ or SMRMSG); found automatically
            when omitted and ``config.find_companion`` is set
        file_format: 'sbet', 'pof', 'pos' or 'auto'
        config: Reader options

    Returns:
        Iterator of records; iterate it to completion or close it to
        release the files
    """
    config = config or ReaderConfig()
    if file_format == 'auto':
        file_format = config.file_format
    if file_format == 'auto':
        file_format = detect_format(path)

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Trajectory file not found: {path}")

    if accuracy_path is None and config.find_companion and file_format != 'pos':
        accuracy_path = companion_path(path, file_format)
    if accuracy_path is not None:
        accuracy_path = Path(accuracy_path)
        if not accuracy_path.exists():
            raise FileNotFoundError(f"Accuracy file not found: {accuracy_path}")

    logger.info(f"Reading {file_format} trajectory {path}")

    with ExitStack() as stack:
        if file_format == 'pos':
            if accuracy_path is not None:
                logger.warning(f"POS files carry accuracy inline; ignoring {accuracy_path}")
            # Binary lines so that PosReader reports bad encodings by line
            source = stack.enter_context(open(path, 'rb'))
            records = PosReader(
                source,
                layout=config.pos.layout(),
                comment_prefixes=config.pos.comment_prefixes,
                header_lines=config.pos.header_lines,
            )
        elif file_format in ('sbet', 'pof'):
            source = stack.enter_context(open(path, 'rb'))
            accuracy = None
            if accuracy_path is not None:
                logger.info(f"Using accuracy file {accuracy_path}")
                accuracy = stack.enter_context(open(accuracy_path, 'rb'))
            else:
                logger.info(f"No accuracy file for {path}")

            if file_format == 'sbet':
                records = read_sbet(source, accuracy)
            elif accuracy is None:
                records = correlate(
                    PofReader(source, header_size=config.riegl.pof_header_size), []
                )
            else:
                records = read_pof_poq(
                    source,
                    accuracy,
                    pof_header_size=config.riegl.pof_header_size,
                    poq_header_size=config.riegl.poq_header_size,
                )
        else:
            raise ValueError(f"Unknown trajectory format {file_format!r}")
        # Readers own the files from here on
        stack.pop_all()
    return records
