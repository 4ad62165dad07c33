"""대시보드 초기 데이터 (서버 시작 시 메모리 저장소에 적재)."""

MOCK_THREADS = [
    {
        "id": "1",
        "source": "slack",
        "title": "Authentication bug fix discussion",
        "summary": "Team discussed a critical auth bug affecting user login across multiple environments",
        "status": "processed",
        "createdAt": "2024-01-15T10:30:00Z",
        "messageCount": 12,
        "participants": ["john.doe", "sarah.smith", "mike.johnson"],
        "channel": "#engineering",
        "outputs": {
            "commitSummary": "fix: resolve auth token validation issue in JWT middleware",
            "prTitle": "Fix authentication token validation bug affecting user sessions",
            "hasMeetingSummary": True,
            "taskCount": 3,
            "processingTime": "2.3s",
        },
    },
    {
        "id": "2",
        "source": "discord",
        "title": "Feature planning: Dark mode implementation",
        "summary": "Planning discussion for implementing dark mode feature with accessibility considerations",
        "status": "processed",
        "createdAt": "2024-01-15T09:15:00Z",
        "messageCount": 8,
        "participants": ["alice.brown", "bob.wilson"],
        "channel": "#design",
        "outputs": {
            "commitSummary": "feat: add dark mode theme with system preference detection",
            "prTitle": "Implement dark mode theme toggle with accessibility support",
            "hasMeetingSummary": False,
            "taskCount": 5,
            "processingTime": "1.8s",
        },
    },
    {
        "id": "3",
        "source": "slack",
        "title": "Database optimization strategies",
        "summary": "Discussion about optimizing database queries for better performance",
        "status": "processing",
        "createdAt": "2024-01-15T08:45:00Z",
        "messageCount": 15,
        "participants": ["david.lee", "emma.davis", "frank.miller"],
        "channel": "#backend",
    },
    {
        "id": "4",
        "source": "teams",
        "title": "UI/UX review for checkout flow",
        "summary": "Review and feedback session for the new checkout flow design",
        "status": "pending",
        "createdAt": "2024-01-15T07:20:00Z",
        "messageCount": 6,
        "participants": ["grace.taylor", "henry.anderson"],
        "channel": "#product",
    },
]


def _member(member_id, name, email, role, department, status, join_date, location, phone,
            last_active, threads, tasks):
    return {
        "id": member_id,
        "name": name,
        "email": email,
        "role": role,
        "department": department,
        "status": status,
        "joinDate": join_date,
        "location": location,
        "phone": phone,
        "lastActive": last_active,
        "threadsParticipated": threads,
        "tasksCompleted": tasks,
    }


MOCK_TEAM_MEMBERS = [
    _member("1", "John Doe", "john.doe@company.com", "Senior Frontend Developer", "Engineering",
            "online", "2023-01-15", "San Francisco, CA", "+1 (555) 123-4567",
            "2024-01-15T14:30:00Z", 42, 89),
    _member("2", "Sarah Smith", "sarah.smith@company.com", "Backend Developer", "Engineering",
            "online", "2023-03-10", "New York, NY", "+1 (555) 234-5678",
            "2024-01-15T14:25:00Z", 38, 76),
    _member("3", "Mike Johnson", "mike.johnson@company.com", "DevOps Engineer", "Engineering",
            "away", "2023-02-20", "Austin, TX", "+1 (555) 345-6789",
            "2024-01-15T13:45:00Z", 29, 54),
    _member("4", "Alice Brown", "alice.brown@company.com", "UX Designer", "Design",
            "online", "2023-04-05", "Seattle, WA", "+1 (555) 456-7890",
            "2024-01-15T14:20:00Z", 33, 67),
    _member("5", "Bob Wilson", "bob.wilson@company.com", "Product Manager", "Product",
            "offline", "2023-01-30", "Boston, MA", "+1 (555) 567-8901",
            "2024-01-15T12:30:00Z", 51, 103),
]


# (threads, tasks, errors) for Jan 1 ~ Jan 15
_DAILY_COUNTS = [
    (12, 34, 2), (19, 45, 1), (8, 23, 3), (15, 38, 0), (23, 52, 1),
    (18, 41, 2), (25, 58, 0), (31, 67, 1), (22, 49, 2), (28, 61, 0),
    (35, 78, 1), (29, 64, 3), (33, 71, 0), (27, 59, 1), (41, 89, 0),
]

# (avg, max, min) seconds for Jan 1 ~ Jan 5
_PROCESSING_TIMES = [
    (2.1, 4.2, 0.8), (1.9, 3.8, 0.9), (2.3, 5.1, 1.1), (1.8, 3.2, 0.7), (2.0, 4.5, 0.9),
]

MOCK_ANALYTICS = {
    "threadsProcessed": [
        {"date": f"Jan {day}", "threads": threads, "tasks": tasks, "errors": errors}
        for day, (threads, tasks, errors) in enumerate(_DAILY_COUNTS, start=1)
    ],
    "processingTime": [
        {"date": f"Jan {day}", "avgTime": avg, "maxTime": max_, "minTime": min_}
        for day, (avg, max_, min_) in enumerate(_PROCESSING_TIMES, start=1)
    ],
    "sourceDistribution": [
        {"source": "slack", "count": 125, "percentage": 62.5},
        {"source": "discord", "count": 45, "percentage": 22.5},
        {"source": "teams", "count": 30, "percentage": 15.0},
    ],
    "summary": {
        "totalThreads": 342,
        "totalTasks": 789,
        "totalErrors": 12,
        "avgProcessingTime": 2.1,
    },
}
