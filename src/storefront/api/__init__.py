"""Storefront HTTP API package."""
