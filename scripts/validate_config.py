#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dfa_engine.config.loader import CONFIG_FILENAME, ConfigLoader
from dfa_engine.config.validation import ConfigValidator
from dfa_engine.errors import ConfigurationError


def main():
    """Validate dfa.yaml in the given directory (default: ./config)."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd() / "config"
    config_file = config_dir / CONFIG_FILENAME

    print(f"🔍 Validating {config_file}...")
    if not config_file.exists():
        print("ℹ️  No configuration file found, defaults apply")
        sys.exit(0)

    loader = ConfigLoader.create(config_dir)

    try:
        config = loader.merge_config()
    except ConfigurationError as e:
        print(f"❌ {e}")
        sys.exit(1)

    errors = ConfigValidator.validate_config(config)
    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    print("✅ Configuration is valid")
    for section, values in config.items():
        print(f"  {section}: {values}")
    sys.exit(0)


if __name__ == "__main__":
    main()
