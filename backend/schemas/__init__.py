"""
Pydantic schemas for API request and response validation.

All FastAPI endpoints MUST use strict Pydantic models with explicit types.
Wire field names (chatId, userId, searchData) are declared as aliases so
Python code keeps snake_case.
"""
