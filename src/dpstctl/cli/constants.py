"""Shared constants for the dpstctl CLI."""

# Status mode reports the feature state through the exit code
EXIT_DISABLED = 0
EXIT_ENABLED = 1

EXIT_CONFIG_NOT_FOUND = 3
EXIT_BACKUP_FAILED = 4
EXIT_WRITE_FAILED = 5
EXIT_NOT_ELEVATED = 255

REBOOT_NOTICE = "A reboot is required for the change to take effect."
