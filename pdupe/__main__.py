"""
Allow running the package with: python -m pdupe

Examples:
    python -m pdupe ~/Pictures               # Fingerprint and compare
    python -m pdupe ~/Pictures -m stddev -v  # Show every distance
    python -m pdupe config                   # Show configuration
    python -m pdupe config --init            # Create example config file
"""

import sys


def show_config() -> int:
    from .exceptions import ConfigError
    from .user_config import get_user_config

    config = get_user_config()

    if '--init' in sys.argv or '-i' in sys.argv:
        if config.create_example_config():
            print("✓ Created example configuration file at:")
            print(f"  {config.config_file_path}")
            print("\nEdit this file to customize pdupe settings.")
            return 0
        print("✗ Failed to create configuration file.")
        return 1

    print(f"Configuration file: {config.config_file_path}")
    if config.config_file_path.exists():
        print("Status: ✓ Found")
    else:
        print("Status: ✗ Not found (using defaults)")
        print("\nRun 'python -m pdupe config --init' to create one.")

    print("\nCurrent settings:")
    try:
        print(f"  default_threshold: {config.default_threshold:g}")
        print(f"  default_workers: {config.default_workers}")
        print(f"  default_metric: {config.default_metric}")
        print(f"  grid: {config.grid_rows}x{config.grid_cols}")
        print(f"  max_image_pixels: {config.max_image_pixels:,}")
    except ConfigError as e:
        print(f"✗ {e}")
        return 2
    return 0


def main():
    if len(sys.argv) > 1 and sys.argv[1] == 'config':
        # Remove 'config' from argv
        sys.argv.pop(1)
        sys.exit(show_config())

    from .cli import main as cli_main
    sys.exit(cli_main())


if __name__ == '__main__':
    main()
