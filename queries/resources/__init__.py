"""Named query files packaged with the library."""
