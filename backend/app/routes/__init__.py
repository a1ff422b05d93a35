# Routes package init
"""
Postboard Backend — API Routes Package
========================================

Route Inventory:
    - posts.py:     GET  /posts                 (list posts)
                    POST /posts                 (create post)
                    GET  /posts/{post}          (post with comments expanded)
                    PUT  /posts/{post}/upvote   (upvote post)
    - comments.py:  POST /posts/{post}/comments                   (create comment)
                    PUT  /posts/{post}/comments/{comment}/upvote  (upvote comment)
    - health.py:    GET  /health, GET /

Routes are thin: resolve path entities via app.resolvers, make one service
call, return its schema object.
"""
