#!/usr/bin/env python3
from sitemapgen.cli import main

if __name__ == "__main__":
    main()
