# -*- coding: utf-8 -*-

"""
Main entry point for launching the Outline Navigator application.
"""

from outline_navigator.cli import main

if __name__ == '__main__':
    main()
