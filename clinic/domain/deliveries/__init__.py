# Deliveries domain module
