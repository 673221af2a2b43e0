"""HTTP API for the estimator."""
