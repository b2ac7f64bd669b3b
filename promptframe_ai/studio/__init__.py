"""
Image studio domain logic.

Model capability checks, prompt building, model response parsing, image
input/output, the OpenAI image and chat clients, the background generation
runner and concept list refinement.
"""
