"""Test fixture package for the Brazil geolocation service.

Contains fixtures for:
- The shared geocoding HTTP client and resolver
- The FastAPI application and HTTP test clients
"""
