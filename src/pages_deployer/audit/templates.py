"""Default bundler configuration written when the project has none."""

from __future__ import annotations

VITE_CONFIG_TEMPLATE = """\
import {{ defineConfig }} from 'vite'
import react from '@vitejs/plugin-react'

export default defineConfig({{
  plugins: [react()],
  base: '{base}',
}})
"""


def base_path(slug: str) -> str:
    return f"/{slug.strip('/')}/"


def render_vite_config(slug: str) -> str:
    return VITE_CONFIG_TEMPLATE.format(base=base_path(slug))
