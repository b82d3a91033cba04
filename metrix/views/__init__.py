"""HTML rendering for the pages and fragments of the application."""