"""Text matching and privacy policy analysis."""
