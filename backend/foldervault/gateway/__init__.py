"""
API Gateway Module

This module provides a centralized gateway layer for the API that handles:
- Router registration
- Middleware management
- Error handling
- Health endpoints

The gateway acts as the single entry point for all API requests.
"""
from .gateway import APIGateway

__all__ = ["APIGateway"]
