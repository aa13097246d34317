# Contract types an employer can offer
CONTRACT_TYPES = [
    'Employment contract',
    'B2B contract',
    'Contract of mandate',
    'Contract for specific work',
]

# Upper bounds for list fields on a job offer
MAX_JOB_LEVELS = 10
MAX_WORKING_MODES = 10
MAX_LIST_ITEMS = 20
MAX_TAGS = 30

PUBLIC_PAGE_SIZE = 20
PUBLIC_MAX_PAGE_SIZE = 50

CV_ALLOWED_EXTENSIONS = ['pdf', 'doc', 'docx']
