"""Invoice document layout and rendering."""
