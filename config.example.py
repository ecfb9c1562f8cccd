# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file),
see src/weekly_planner/config.py. This file lists what can be set.
"""

ENV_VARS = {
    # App / logging
    "PLANNER_APP_NAME": "App display name (default: weekly-planner).",
    "PLANNER_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Local data
    "PLANNER_DATA_DIR": "Private data directory, created on first start (default: ~/.local/share/weekly-planner).",
    "PLANNER_TASKS_DB_PATH": "SQLite file (default: <data dir>/weekly_planner.db).",
    "PLANNER_LOG_DIR": "Where weekly_planner.log is written (default: <data dir>).",
}
