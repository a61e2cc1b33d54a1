"""s01_extract_frames package."""
