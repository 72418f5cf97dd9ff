"""
Pydantic schemas for API request and response validation.

Every JSON response uses the envelope ``{success, message, data}``; errors use
``{success: false, message}`` (see ErrorResponse).
"""
