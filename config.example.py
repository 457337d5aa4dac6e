# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "FOCUSFLOW_APP_NAME": "App display name (default: focusflow).",
    "FOCUSFLOW_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Front end
    "FOCUSFLOW_CONSOLE_ENABLED": "Run the console front end (true/false, default: true).",
    "FOCUSFLOW_CONFIRM_DESTRUCTIVE": "Ask before delete / clear-completed (true/false, default: true).",
    # View defaults (not persisted)
    "FOCUSFLOW_DEFAULT_FILTER": "all | active | completed (default: all).",
    "FOCUSFLOW_DEFAULT_SORT": "<created|due|priority>-<asc|desc> (default: created-desc).",
    # Paths (gitignored)
    "FOCUSFLOW_DATA_DIR": "Local data directory (default: .local/focusflow).",
    "FOCUSFLOW_STORE_PATH": "SQLite blob store path (default: <data_dir>/blobs.sqlite3).",
    "FOCUSFLOW_STORAGE_KEY": "Blob key holding the task list (default: focusflow.todos.v1).",
    "FOCUSFLOW_LOG_FILE": "Debug log file (default: <data_dir>/focusflow.log).",
}
