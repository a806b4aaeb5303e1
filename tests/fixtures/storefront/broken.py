"""A fixture module whose import fails."""

raise ImportError("storefront.broken needs a driver that is not installed")
