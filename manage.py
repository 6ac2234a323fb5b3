#!/usr/bin/env python
from pr_labeler.cli import cli


if __name__ == "__main__":
    cli()
