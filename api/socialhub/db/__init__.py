"""Database access for SocialHub."""
