# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use .env (local, gitignored) for anything machine-specific.

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo-ledger).",
    "TODO_LOG_LEVEL": "Console logging level (default: INFO).",
    # Connectors
    "TODO_CONSOLE_ENABLED": "Enable console REPL (true/false, default: true).",
    "TODO_API_ENABLED": "Enable HTTP API (true/false, default: true).",
    # HTTP API
    "TODO_API_HOST": "Bind address (default: 127.0.0.1).",
    "TODO_API_PORT": "Port (default: $PORT or 5000).",
    # Accounts
    "TODO_ACCOUNTS": "Comma/space separated demo accounts (0x + 40 hex). Default: 3 dev-chain accounts.",
    "TODO_DEFAULT_ACCOUNT": "Caller used when a request has no X-Account header (default: first account).",
    # Ledger
    "TODO_MAX_DESCRIPTION_LENGTH": "Maximum task description length (default: 500).",
    # Paths
    "TODO_DATA_DIR": "Local data dir (default: .local/todo-ledger).",
    "TODO_LEDGER_DB_PATH": "SQLite ledger path (default: <data_dir>/ledger.sqlite3).",
}
