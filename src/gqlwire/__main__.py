# -*- coding: utf-8 -*-

from .cli import cli

cli(prog_name="gqlwire")
