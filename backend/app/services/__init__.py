# Services package init
"""
Postboard Backend — Services Layer
====================================

Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - PostService:    list, create, load, expand, upvote posts
    - CommentService: load, create (two writes, one transaction), upvote comments
    - lookup:         path identifier parsing shared by both

Services take the session as an argument and hold no state, so one
module-level instance of each serves every request.
"""
