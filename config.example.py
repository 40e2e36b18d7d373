# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file,
see src/task_dashboard/config.py).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKDASH_APP_NAME": "App display name (default: task-dashboard).",
    "TASKDASH_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "TASKDASH_DATA_DIR": "Local data directory for taskdash.log (default: .local/taskdash).",
    # Remote record store
    "TASKDASH_API_URL": "Base URL of the REST store serving /tasks (default: http://localhost:3001).",
    "API_URL": "Legacy fallback for TASKDASH_API_URL.",
    # Dashboard behaviour
    "TASKDASH_CONFIRM_DELETES": "Ask y/N before deleting a task (true/false, default: true).",
}
