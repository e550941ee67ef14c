"""Domain shapes (pydantic) returned by services and accepted as drafts."""
