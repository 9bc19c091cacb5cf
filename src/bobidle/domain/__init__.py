"""Domain models: state value, definitions, and static lookup structures."""
