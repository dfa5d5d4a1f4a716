# chip8_core_tracer/config/loader.py
import logging
import yaml
from typing import Dict, Any
from .models import MachineConfig, DisplayConfig, DEFAULT_KEYMAP

logger = logging.getLogger(__name__)

_MACHINE_KEYS = {"legacy_index_increment", "cycle_hz", "timer_hz", "key_poll_interval", "rng_seed", "display", "keymap"}

class ConfigLoader:
    def load_from_file(self, path: str) -> MachineConfig:
        with open(path, 'r') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
        return self.parse_config(data or {})

    def parse_config(self, data: Dict[str, Any]) -> MachineConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        for key in data:
            if key not in _MACHINE_KEYS:
                logger.warning("Ignoring unknown config key: %s", key)

        cycle_hz = self._parse_int(data.get("cycle_hz", 700))
        timer_hz = self._parse_int(data.get("timer_hz", 60))
        if cycle_hz <= 0 or timer_hz <= 0:
            raise ValueError(f"Frequencies must be positive: cycle_hz={cycle_hz}, timer_hz={timer_hz}")

        key_poll_interval = float(data.get("key_poll_interval", 0.0016))
        if key_poll_interval <= 0:
            raise ValueError(f"key_poll_interval must be positive: {key_poll_interval}")

        seed = data.get("rng_seed")

        return MachineConfig(
            legacy_index_increment=self._parse_bool(data.get("legacy_index_increment", False)),
            cycle_hz=cycle_hz,
            timer_hz=timer_hz,
            key_poll_interval=key_poll_interval,
            rng_seed=self._parse_int(seed) if seed is not None else None,
            display=self._parse_display(data.get("display") or {}),
            keymap=self._parse_keymap(data.get("keymap")),
        )

    def _parse_display(self, data: Dict[str, Any]) -> DisplayConfig:
        if not isinstance(data, dict):
            raise ValueError(f"display must be a mapping, got {type(data).__name__}")
        default = DisplayConfig()
        scale = self._parse_int(data.get("scale", default.scale))
        if scale <= 0:
            raise ValueError(f"Display scale must be positive: {scale}")
        return DisplayConfig(
            scale=scale,
            foreground=str(data.get("foreground", default.foreground)),
            background=str(data.get("background", default.background)),
        )

    def _parse_keymap(self, data) -> Dict[str, int]:
        if data is None:
            return dict(DEFAULT_KEYMAP)
        if not isinstance(data, dict):
            raise ValueError(f"keymap must be a mapping, got {type(data).__name__}")
        keymap = {}
        for name, value in data.items():
            key = self._parse_int(value)
            if not 0 <= key <= 0xF:
                raise ValueError(f"Keymap entry {name!r} must map to 0x0-0xF, got {value!r}")
            keymap[str(name).upper()] = key
        return keymap

    # @intent:responsibility 真偽値、または大文字小文字を問わない "true"/"false" のみを受け付けます。
    def _parse_bool(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("true", "false"):
            return value.lower() == "true"
        raise ValueError(f"Invalid boolean format: {value!r}")

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
