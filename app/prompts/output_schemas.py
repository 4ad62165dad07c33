"""
모드별 구조화 출력 스키마(tool 정의)입니다.

Claude에게 이 도구를 강제로 호출하게 하여, 응답이 항상 정해진 JSON 형태로 오도록 합니다.
필드 이름은 app.models.results 모델의 camelCase 별칭과 일치해야 합니다.
"""

CONFIDENCE_PROPERTY = {
    "type": "number",
    "description": "Confidence score from 0 to 1",
    "minimum": 0,
    "maximum": 1,
}

STRING_LIST = {"type": "array", "items": {"type": "string"}}


GITHUB_TOOL = {
    "name": "generate_github_suggestions",
    "description": "Generate GitHub commit messages and PR suggestions from thread discussion",
    "input_schema": {
        "type": "object",
        "properties": {
            "commits": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "type": {
                            "type": "string",
                            "enum": ["feat", "fix", "docs", "style", "refactor", "test", "chore"],
                            "description": "Type of commit following conventional commits",
                        },
                        "scope": {"type": "string", "description": "Optional scope of the commit"},
                        "description": {"type": "string", "description": "Brief description of the change"},
                        "body": {"type": "string", "description": "Optional detailed description"},
                        "breakingChange": {"type": "boolean", "description": "Whether this is a breaking change"},
                    },
                    "required": ["type", "description"],
                },
            },
            "pullRequest": {
                "type": "object",
                "properties": {
                    "title": {"type": "string", "description": "Clear, descriptive PR title"},
                    "description": {"type": "string", "description": "Detailed PR description with context"},
                    "labels": {**STRING_LIST, "description": "Relevant labels for the PR"},
                    "reviewers": {**STRING_LIST, "description": "Suggested reviewers based on discussion"},
                    "assignees": {**STRING_LIST, "description": "Suggested assignees"},
                },
                "required": ["title", "description", "labels"],
            },
            "confidence": CONFIDENCE_PROPERTY,
        },
        "required": ["commits", "pullRequest", "confidence"],
    },
}


NOTION_TOOL = {
    "name": "generate_notion_tasks",
    "description": "Generate Notion tasks and action items from thread discussion",
    "input_schema": {
        "type": "object",
        "properties": {
            "tasks": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "title": {"type": "string", "description": "Clear, actionable task title"},
                        "description": {"type": "string", "description": "Detailed task description"},
                        "priority": {
                            "type": "string",
                            "enum": ["low", "medium", "high"],
                            "description": "Task priority level",
                        },
                        "status": {
                            "type": "string",
                            "enum": ["not_started", "in_progress", "completed"],
                            "description": "Current task status",
                        },
                        "assignee": {"type": "string", "description": "Person assigned to the task"},
                        "dueDate": {"type": "string", "description": "Due date in ISO format"},
                        "tags": {**STRING_LIST, "description": "Relevant tags for categorization"},
                        "estimatedHours": {"type": "number", "description": "Estimated hours to complete"},
                    },
                    "required": ["title", "priority", "status", "tags"],
                },
            },
            "summary": {"type": "string", "description": "Brief summary of all tasks"},
            "totalTasks": {"type": "integer", "description": "Total number of tasks created"},
            "confidence": CONFIDENCE_PROPERTY,
        },
        "required": ["tasks", "summary", "totalTasks", "confidence"],
    },
}


SUMMARY_TOOL = {
    "name": "generate_meeting_summary",
    "description": "Generate comprehensive meeting summary from thread discussion",
    "input_schema": {
        "type": "object",
        "properties": {
            "title": {"type": "string", "description": "Descriptive title for the discussion/meeting"},
            "summary": {"type": "string", "description": "Comprehensive summary of the discussion"},
            "keyPoints": {**STRING_LIST, "description": "Main points discussed"},
            "actionItems": {**STRING_LIST, "description": "Specific action items identified"},
            "decisions": {**STRING_LIST, "description": "Decisions made during discussion"},
            "nextSteps": {**STRING_LIST, "description": "Next steps to be taken"},
            "participants": {**STRING_LIST, "description": "List of participants"},
            "duration": {"type": "string", "description": "Estimated duration of discussion"},
            "confidence": CONFIDENCE_PROPERTY,
        },
        "required": [
            "title",
            "summary",
            "keyPoints",
            "actionItems",
            "decisions",
            "nextSteps",
            "participants",
            "confidence",
        ],
    },
}
