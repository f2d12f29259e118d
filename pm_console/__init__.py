"""Property console: list-view engine for tenants, leases and maintenance issues."""
