"""Python client for the BLIP location data platform."""
