"""HTTP surface: app factory, routes and error rendering."""
