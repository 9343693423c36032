"""Global configuration: page geometry, layout constants, locale settings."""

from pathlib import Path

# Default output directory for exported artifacts
DEFAULT_OUTPUT_DIR = Path("exports")

# Time zone used for every date shown to a person (pt-BR locale)
DEFAULT_TIMEZONE = "America/Sao_Paulo"

# pt-BR date and datetime renderings
DATE_FORMAT = "%d/%m/%Y"
DATETIME_FORMAT = "%d/%m/%Y, %H:%M:%S"

# On-screen page sizes; exports always carry the full dataset
PAGE_SIZE_OPTIONS = (10, 25, 50)
DEFAULT_PAGE_SIZE = 25

# CSV
CSV_DELIMITER = ";"
CSV_LINE_TERMINATOR = "\r\n"
CSV_BOM = "\ufeff"

# PDF page: A4 landscape, all distances in millimetres
PAGE_WIDTH_MM = 297
PAGE_HEIGHT_MM = 210
SIDE_MARGIN_MM = 2
TOP_MARGIN_MM = 36
BOTTOM_MARGIN_MM = 20
HEADER_BAND_MM = 15

# Width budget shared by the table columns (page width minus both margins)
TABLE_WIDTH_MM = PAGE_WIDTH_MM - 2 * SIDE_MARGIN_MM

# Characters of 8pt Helvetica that fit in one millimetre of cell
CHARS_PER_MM = 2.5

# Smallest width handed to a column without a baseline
UNKNOWN_COLUMN_FLOOR = 20

# Captions drawn on every PDF page
SYSTEM_CAPTION = "SISTEMA DE GESTÃO DIABETES"
FOOTER_CAPTION = "Sistema de Gestão Diabetes"

# RGB colours (0-255)
ACCENT_RGB = (59, 130, 246)
RULE_RGB = (200, 200, 200)
STRIPE_RGB = (248, 250, 252)
FOOTER_TEXT_RGB = (100, 100, 100)

# Prefix of every exported file name
FILE_PREFIX = "relatorio"
