"""
Output Module

Renders decay sources as a JSON list, a text table, or MCNP source
distribution cards. Each renderer is independent of the others.
"""

from .files import output_path, create_file_with_fallback
from .json_writer import render_json, write_json
from .table import render_table, write_table
from .mcnp import render_mcnp, write_mcnp
