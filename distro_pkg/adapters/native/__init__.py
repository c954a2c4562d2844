"""Native package-manager backends, one module per distribution family."""
