"""
Global settings management
"""

import os
from dataclasses import dataclass, asdict
from typing import Optional
import json
from pathlib import Path


@dataclass
class Settings:
    """Global engine settings"""

    # Interpolation
    term_fade_seconds: float = 0.3
    term_late_fade_in_threshold: float = 0.7
    default_term_duration: float = 3.0

    # Arrow identity
    arrow_match_distance: float = 8.0

    # Terminology overlay
    max_terms_on_screen: int = 2
    term_cooldown_seconds: float = 6.0
    term_display_seconds: float = 4.0
    term_collision_threshold: float = 0.15
    highlighted_player_distance: float = 10.0

    # Broadcast overlay
    max_callouts: int = 4
    max_arrows: int = 4
    max_circles: int = 4
    max_micro_stories: int = 2

    # Editorial callouts
    max_editorial_callouts: int = 3
    min_callout_duration: float = 3.0
    callout_gap_seconds: float = 1.0
    first_callout_start: float = 1.0
    max_callout_text: int = 50
    max_callout_detail: int = 200
    drop_setup_callouts: bool = True

    # Placement
    placement_offset: float = 8.0
    safe_margin: float = 8.0

    # Video geometry fallback
    default_video_width: int = 1920
    default_video_height: int = 1080

    @classmethod
    def from_file(cls, filepath: str) -> 'Settings':
        """Load settings from JSON file"""
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls(**data)

    @classmethod
    def from_env(cls) -> 'Settings':
        """Load settings from environment variables"""
        settings = cls()

        # Override from environment
        for field_name, field_info in settings.__dataclass_fields__.items():
            env_key = f"GRIDIRON_{field_name.upper()}"
            if env_key in os.environ:
                value = os.environ[env_key]
                # Convert types
                if field_info.type in (int, 'int'):
                    value = int(value)
                elif field_info.type in (float, 'float'):
                    value = float(value)
                elif field_info.type in (bool, 'bool'):
                    value = value.lower() in ('true', '1', 'yes')
                setattr(settings, field_name, value)

        return settings

    def save(self, filepath: str):
        """Save settings to JSON file"""
        Path(filepath).parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(asdict(self), f, indent=2)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get global settings instance"""
    global _settings

    if _settings is None:
        # Try loading from file first
        config_file = os.environ.get("GRIDIRON_CONFIG", "config/settings.json")
        if os.path.exists(config_file):
            _settings = Settings.from_file(config_file)
        else:
            # Load from environment or use defaults
            _settings = Settings.from_env()

    return _settings


def reset_settings():
    """Reset settings (mainly for testing)"""
    global _settings
    _settings = None
