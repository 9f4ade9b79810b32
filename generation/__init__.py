"""
Assignment Generation Pipeline
generation/

Steps:
1. Prompt Builder       — fill the assignment prompt with request fields + academic context
2. GPT Client           — call the generation endpoint (OpenRouter, OpenAI-compatible)
3. Validator            — strip fences, decode JSON, check fields, reconcile task count
4. Markdown Renderer    — AssignmentRecord → canonical markdown (when content is JSON)
5. Tokenizer            — markdown → typed block tokens
6. Document Compiler    — tokens → positional Google Docs edit operations
"""
