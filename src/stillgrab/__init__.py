"""stillgrab package."""
