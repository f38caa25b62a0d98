"""mvndeps - filter, prune and render Maven dependency trees."""

__version__ = "1.0.0"
