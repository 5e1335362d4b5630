"""Allow 'python -m n8n_provision' (used by the backup cron job)."""

from n8n_provision.main import main

if __name__ == "__main__":
    main()
