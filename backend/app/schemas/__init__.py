"""
Pydantic schemas for stored documents and form submissions.
"""
