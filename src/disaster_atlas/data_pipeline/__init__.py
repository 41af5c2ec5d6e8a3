"""Loading, validation and preparation of the atlas input files."""
