# Checkups domain module
