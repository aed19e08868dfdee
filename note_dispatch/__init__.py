"""
Note Dispatch — forward vault notes and PDFs to automation webhooks.

Right-clicking a Markdown note offers to send its text to a notes webhook;
right-clicking a PDF offers to upload it to an embeddings webhook.  Before
each send the user confirms the namespace the content is filed under.
"""
