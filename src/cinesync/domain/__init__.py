"""Domain model and reconciliation logic for the Notion to Discord sync."""
