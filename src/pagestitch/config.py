"""
Configuration centrale pour la capture pleine page.

Ce fichier contient tous les paramètres configurables du pipeline,
y compris les marges de tuilage et les temps d'attente.
"""

# Paramètres de tuilage pleine page
CAPTURE_CONFIG = {
    'min_part_height': 10,         # Hauteur minimale d'une tuile en pixels
    'max_scrollbar_size': 50,      # Marge retirée à la hauteur du viewport (scrollbars, footers fixes)
    'hide_scrollbars': True,       # Masque les scrollbars pendant la capture
    'use_css_transition': False,   # Déplacement par transform CSS plutôt que par scroll
    'rotation_degrees': 0,         # Rotation appliquée à chaque capture
    'automatic_rotation': True,    # Rotation auto si paysage déclaré mais capture portrait
    'automatic_rotation_degrees': 270,
}

# Paramètres du dimensionnement du viewport
VIEWPORT_CONFIG = {
    'max_diff': 3,                 # Écart max (px) pour tenter la recherche pas à pas
    'resize_retries': 3,           # Tentatives de redimensionnement de la fenêtre
}

# Temps d'attente (en secondes)
WAIT_TIMES = {
    'page_load': 10,               # Temps d'attente maximum pour le chargement d'une page
    'window_resize': 1.0,          # Stabilisation après redimensionnement de la fenêtre
    'scroll': 0.25,                # Stabilisation après un scroll
    'transform': 0.25,             # Stabilisation après un transform CSS
    'overflow': 0.1,               # Stabilisation après modification de l'overflow
    'before_screenshot': 0.1,      # Attente avant chaque capture
}

# Paramètres image
IMAGE_CONFIG = {
    'format': 'PNG',               # Format d'encodage unique dans tout le pipeline
    'decode_enabled': True,        # Décodage des pixels autorisé
}

# Paramètres du navigateur
BROWSER_CONFIG = {
    'headless': False,
    'maximize': False,
    'window_size': (1280, 900),
    'user_agent': None,
    'device_scale_factor': None,   # Force le device pixel ratio (ex. 2 pour simuler un écran HiDPI)
}

# Paramètres de debug
DEBUG_CONFIG = {
    'save_debug_screenshots': False,
    'debug_screenshots_prefix': 'screenshot_',
    'trace_enabled': False,
}

# Chemins des fichiers
PATHS = {
    'logs': 'logs',
    'debug_screenshots': 'temp/debug_screenshots',
}
