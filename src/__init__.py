"""Application Layer.

Application services that orchestrate domain logic for the presentation
layer. Imported as `application.*` with `src` on the path.
"""
