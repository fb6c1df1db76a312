"""Route free-text requests to skill documents."""
