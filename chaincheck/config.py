"""Settings for a chaincheck run.

Settings come from an optional JSON file, e.g.::

    {
        "knowledge_base": "required_props.csv",
        "terminal_call": "send",
        "stop_on_ambiguity": false
    }

Unknown keys are rejected.
"""

from pathlib import Path
from typing import Optional

import msgspec

from .exceptions import SettingsError


class CheckSettings(msgspec.Struct, omit_defaults=True, forbid_unknown_fields=True):
    """Tunable names and behaviour of the analysis."""

    knowledge_base: Optional[str] = None  # None: bundled table
    terminal_call: str = "send"
    client_marker: str = "Client"
    sdk_prefix: str = "aws_sdk_"
    decorator: str = "required_props"
    stop_on_ambiguity: bool = True
    check_all_functions: bool = False
    use_cache: bool = True


_decoder = msgspec.json.Decoder(CheckSettings)


def load_settings(path: str | Path) -> CheckSettings:
    """Load settings from a JSON file.

    Relative ``knowledge_base`` paths are resolved against the settings
    file's directory.

    Raises:
        SettingsError: If the file can't be read or doesn't match the schema.
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            settings = _decoder.decode(f.read())
    except OSError as e:
        raise SettingsError(f"cannot read settings file {path}: {e}") from e
    except msgspec.DecodeError as e:
        raise SettingsError(f"invalid settings file {path}: {e}") from e

    if settings.knowledge_base is not None:
        kb_path = Path(settings.knowledge_base)
        if not kb_path.is_absolute():
            settings = msgspec.structs.replace(
                settings, knowledge_base=str(path.parent / kb_path)
            )
    return settings
