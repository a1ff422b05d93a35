# Schemas package init
"""
Postboard Backend — API Schemas
=================================

    - post:   request bodies and post/comment response shapes
    - common: error, health and service-info responses
"""
