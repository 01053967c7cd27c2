"""Assembly sequence: step-piece association and per-step diagrams."""

from .associate import associate
from .gen_step_diagram import render_step_diagram, render_assembly_steps
