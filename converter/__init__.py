# Converter module
