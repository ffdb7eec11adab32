"""DayNote journal analytics service."""
