# Patients domain module
