# Immunizations domain module
