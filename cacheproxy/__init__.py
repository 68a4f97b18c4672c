"""Object cache, bounded shared buffer, robust socket I/O and a sample CGI adder."""

__version__ = "0.1.0"