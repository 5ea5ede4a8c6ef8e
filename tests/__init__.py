"""
Unit tests for caseflow.

Test modules:
- test_models: Tests for domain entities and collection encoding
- test_cli: Tests for the command line front end
- unit/test_draft: Tests for edit session drafts
- unit/test_case_book: Tests for the case book and persistence write-through
- unit/test_flow_graph: Tests for flow graph construction and Mermaid output
- unit/test_tabular_generator: Tests for XLSX/CSV export
- unit/test_outline_generator: Tests for the outline tree and XMind export
- unit/test_report_generator: Tests for the HTML report
- unit/test_storage: Tests for slot stores
- unit/test_mermaid_client: Tests for the diagram rendering client
- unit/test_export_deliverables: Tests for the export registry and file writes
- unit/test_config: Tests for configuration loading
- unit/test_logger: Tests for structured logging
"""
