"""Constants for FormForge application"""

# ==================== File Paths ====================
CONFIG_FILE_DEFAULT = "config.toml"
LOG_FILE_DEFAULT = "data/formforge.log"

# ==================== LLM Backends ====================
OLLAMA_URL_DEFAULT = "http://localhost:11434"
OLLAMA_MODEL_DEFAULT = "llama3.2:3b"
OPENAI_MODEL_DEFAULT = "gpt-4o"
OPENAI_API_KEY_ENV = "OPENAI_API_KEY"

# ==================== Sampling ====================
LLM_TEMPERATURE = 0.3
LLM_TOP_P = 0.8
LLM_MAX_TOKENS = 1500
OPENAI_TEMPERATURE = 0.7
OPENAI_MAX_TOKENS = 2000

# ==================== Timeouts (seconds) ====================
TIMEOUT_LLM_REQUEST = 30  # 30 seconds - text completion requests

# ==================== Template Names ====================
TEMPLATE_SYSTEM_PROMPT = "form_system_prompt.j2"
TEMPLATE_USER_PROMPT = "form_user_prompt.j2"
TEMPLATE_FORM_PREVIEW = "form_preview.html.j2"
TEMPLATE_FORM_EDITOR = "form_editor.html.j2"
TEMPLATE_FORM_EXPORT = "form_export.html.j2"

# ==================== Form Editing ====================
NEW_FIELD_LABEL = "New Field"
NEW_SECTION_TITLE = "New Section"
FIELD_ID_PREFIX = "field"
SECTION_ID_PREFIX = "section"
SINGLE_CHECKBOX_LABEL = "I agree"

# ==================== API Messages ====================
ERROR_PROMPT_REQUIRED = "Prompt is required"
ERROR_INTERNAL = "Internal server error"
ERROR_SHARE_UNAVAILABLE = "Coming soon"
