"""Built-in template and config used when no other template is selected."""
